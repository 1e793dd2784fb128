"""Inventory status classification.

- Derives an urgency status for each item from its expiration date and stock level
- Expiration always outranks stock level: expired, then expiring soon, then low stock
- Item-level reorder thresholds override the organization default
- The current time is always an explicit input; wall-clock is only read when omitted
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from supplr.errors import DataIntegrityError
from supplr.models.inventory import InventoryStatus, Item, ItemWithStatus, Settings


def utcnow() -> datetime:
    """Naive UTC wall-clock time."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: object, field_name: str) -> datetime:
    """Normalizes a date/datetime to naive UTC, rejecting anything else."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise DataIntegrityError(f"{field_name} missing or not a date: {value!r}")


def to_decimal(value: object, field_name: str) -> Decimal:
    """Exact Decimal for a money value; floats go through str()."""
    if isinstance(value, Decimal):
        amount = value
    elif value is None or isinstance(value, bool):
        raise DataIntegrityError(f"{field_name} is required")
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise DataIntegrityError(f"{field_name} is not a decimal: {value!r}") from None
    if not amount.is_finite():
        raise DataIntegrityError(f"{field_name} is not a decimal: {value!r}")
    return amount


def require_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataIntegrityError(f"{field_name} missing or not an integer: {value!r}")
    return value


# --- Threshold resolution ---

def resolve_threshold(item: Item, settings: Settings) -> int:
    """Returns the low-stock threshold that applies to an item.

    A zero override counts as unset unless the organization opted in to
    honoring it.
    """
    default = require_int(settings.low_stock_threshold, "lowStockThreshold")
    override = item.reorder_threshold
    if override is None:
        return default
    if override == 0 and not settings.honor_zero_reorder_threshold:
        return default
    return override


# --- Expiration ---

def days_until_expiration(item: Item, now: Optional[datetime] = None) -> int:
    """Whole days left before expiry, floored (negative once expired)."""
    expiration = to_naive_utc(item.expiration_date, "expirationDate")
    current = to_naive_utc(now, "now") if now is not None else utcnow()
    return (expiration - current).days


# --- Classification ---

def classify(
    item: Item, settings: Settings, now: Optional[datetime] = None
) -> InventoryStatus:
    """Classifies a single item; first matching rule wins."""
    expiration = to_naive_utc(item.expiration_date, "expirationDate")
    current = to_naive_utc(now, "now") if now is not None else utcnow()
    warning_days = require_int(settings.expiration_warning_days, "expirationWarningDays")

    if current > expiration:
        return InventoryStatus.EXPIRED

    if (expiration - current).days <= warning_days:
        return InventoryStatus.EXPIRING_SOON

    if item.quantity <= resolve_threshold(item, settings):
        return InventoryStatus.LOW_STOCK

    return InventoryStatus.OK


def add_status(
    items: Iterable[Item], settings: Settings, now: Optional[datetime] = None
) -> list[ItemWithStatus]:
    """Classifies a batch of items against a single instant."""
    current = now if now is not None else utcnow()
    return [
        ItemWithStatus(item=item, status=classify(item, settings, current))
        for item in items
    ]
