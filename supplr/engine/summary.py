"""Aggregates over classified inventory: dashboard summary, waste and filters."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from supplr.engine.status import to_decimal, to_naive_utc, utcnow
from supplr.models.inventory import (
    InventoryStatus,
    InventorySummary,
    Item,
    ItemWithStatus,
    WasteReport,
)

STATUS_LABELS: dict[InventoryStatus, str] = {
    InventoryStatus.OK: "In Stock",
    InventoryStatus.LOW_STOCK: "Low Stock",
    InventoryStatus.EXPIRING_SOON: "Expiring Soon",
    InventoryStatus.EXPIRED: "Expired",
}

STATUS_BADGE_VARIANTS: dict[InventoryStatus, str] = {
    InventoryStatus.OK: "success",
    InventoryStatus.LOW_STOCK: "warning",
    InventoryStatus.EXPIRING_SOON: "warning",
    InventoryStatus.EXPIRED: "destructive",
}


def item_value(item: Item) -> Decimal:
    return to_decimal(item.unit_cost, "unitCost") * item.quantity


def summarize(items: Iterable[ItemWithStatus]) -> InventorySummary:
    """Folds classified items into dashboard totals.

    Values are accumulated as Decimal, so the result does not depend on
    input order.
    """
    summary = InventorySummary()
    for entry in items:
        summary.total_items += 1
        summary.total_value += item_value(entry.item)

        if entry.status == InventoryStatus.EXPIRING_SOON:
            summary.expiring_soon += 1
        elif entry.status == InventoryStatus.EXPIRED:
            summary.expired += 1
        elif entry.status == InventoryStatus.LOW_STOCK:
            summary.low_stock += 1

    return summary


def waste_report(
    items: Iterable[ItemWithStatus],
    window_days: int = 30,
    now: Optional[datetime] = None,
) -> WasteReport:
    """Expired items whose expiration falls inside the trailing window.

    Older expirations are assumed to be reconciled already.
    """
    if window_days < 0:
        raise ValueError("Waste window cannot be negative")

    current = to_naive_utc(now, "now") if now is not None else utcnow()
    cutoff = current - timedelta(days=window_days)

    expired_items = [
        entry
        for entry in items
        if entry.status == InventoryStatus.EXPIRED
        and to_naive_utc(entry.item.expiration_date, "expirationDate") >= cutoff
    ]

    return WasteReport(
        expired_items=expired_items,
        total_waste_value=sum((item_value(e.item) for e in expired_items), Decimal("0")),
        waste_count=len(expired_items),
    )


# --- List helpers for the inventory views ---

def filter_by_status(
    items: list[ItemWithStatus], status: Union[InventoryStatus, str]
) -> list[ItemWithStatus]:
    if status == "all":
        return list(items)
    wanted = InventoryStatus(status)
    return [entry for entry in items if entry.status == wanted]


def search_items(items: list[ItemWithStatus], term: str) -> list[ItemWithStatus]:
    """Case-insensitive match on name, SKU or category."""
    needle = term.strip().lower()
    if not needle:
        return list(items)

    return [
        entry
        for entry in items
        if needle in entry.item.name.lower()
        or (entry.item.sku and needle in entry.item.sku.lower())
        or needle in entry.item.category.lower()
    ]


def items_needing_attention(items: Iterable[ItemWithStatus]) -> list[ItemWithStatus]:
    return [entry for entry in items if entry.status != InventoryStatus.OK]


def status_label(status: Union[InventoryStatus, str]) -> str:
    try:
        return STATUS_LABELS[InventoryStatus(status)]
    except ValueError:
        return "Unknown"


def status_badge_variant(status: Union[InventoryStatus, str]) -> str:
    try:
        return STATUS_BADGE_VARIANTS[InventoryStatus(status)]
    except ValueError:
        return "default"
