"""Inventory data models for clinic stock tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class InventoryStatus(str, Enum):
    OK = "ok"
    LOW_STOCK = "low_stock"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


@dataclass
class Item:
    quantity: int
    unit_cost: Decimal
    expiration_date: datetime
    reorder_threshold: Optional[int] = None
    id: str = ""
    name: str = ""
    sku: Optional[str] = None
    category: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "category": self.category,
            "quantity": self.quantity,
            "unitCost": str(self.unit_cost),
            "expirationDate": self.expiration_date.isoformat(),
            "reorderThreshold": self.reorder_threshold,
        }


@dataclass
class Settings:
    expiration_warning_days: int
    low_stock_threshold: int
    # When False a zero reorder threshold on an item means "unset"
    honor_zero_reorder_threshold: bool = False


@dataclass
class ItemWithStatus:
    item: Item
    status: InventoryStatus

    def to_dict(self) -> dict:
        data = self.item.to_dict()
        data["status"] = self.status.value
        return data


@dataclass
class InventorySummary:
    total_items: int = 0
    total_value: Decimal = Decimal("0")
    expiring_soon: int = 0
    expired: int = 0
    low_stock: int = 0

    def to_dict(self) -> dict:
        return {
            "totalItems": self.total_items,
            "totalValue": float(self.total_value),
            "expiringSoon": self.expiring_soon,
            "expired": self.expired,
            "lowStock": self.low_stock,
        }


@dataclass
class WasteReport:
    expired_items: list[ItemWithStatus] = field(default_factory=list)
    total_waste_value: Decimal = Decimal("0")
    waste_count: int = 0

    def to_dict(self) -> dict:
        return {
            "expiredItems": [entry.to_dict() for entry in self.expired_items],
            "totalWasteValue": float(self.total_waste_value),
            "wasteCount": self.waste_count,
        }
