"""Parsing of persistence-layer records into engine models.

Records arrive as camelCase dicts. Any missing or malformed required field
raises DataIntegrityError; callers translate that into a user-facing error.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from supplr.engine.status import to_decimal, to_naive_utc
from supplr.errors import DataIntegrityError
from supplr.models.inventory import Item, Settings

MAX_NAME_LENGTH = 100
MAX_SKU_LENGTH = 50


def _non_negative_int(record: dict, key: str, required: bool = True) -> Optional[int]:
    value = record.get(key)
    if value is None:
        if required:
            raise DataIntegrityError(f"{key} is required")
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataIntegrityError(f"{key} must be an integer: {value!r}")
    if value < 0:
        raise DataIntegrityError(f"{key} must be non-negative: {value}")
    return value


def _parse_decimal(value: Any, key: str) -> Decimal:
    amount = to_decimal(value, key)
    if amount < 0:
        raise DataIntegrityError(f"{key} must be non-negative: {value}")
    return amount


def _optional_text(record: dict, key: str, max_length: int) -> Optional[str]:
    value = record.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise DataIntegrityError(f"{key} must be a string: {value!r}")
    if len(value) > max_length:
        raise DataIntegrityError(f"{key} too long")
    return value


def _parse_date(value: Any, key: str) -> datetime:
    if isinstance(value, (date, datetime)):
        return to_naive_utc(value, key)
    if not isinstance(value, str) or not value.strip():
        raise DataIntegrityError(f"{key} is required")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise DataIntegrityError(f"{key} is not an ISO-8601 date: {value!r}") from None
    return to_naive_utc(parsed, key)


def parse_item(record: dict) -> Item:
    """Builds an Item from a persistence record."""
    name = _optional_text(record, "name", MAX_NAME_LENGTH) or ""
    sku = _optional_text(record, "sku", MAX_SKU_LENGTH)

    category = record.get("category") or ""
    if isinstance(category, dict):
        category = category.get("name", "")
    if not isinstance(category, str):
        raise DataIntegrityError(f"category must be a string: {category!r}")

    return Item(
        quantity=_non_negative_int(record, "quantity"),
        unit_cost=_parse_decimal(record.get("unitCost"), "unitCost"),
        expiration_date=_parse_date(record.get("expirationDate"), "expirationDate"),
        reorder_threshold=_non_negative_int(record, "reorderThreshold", required=False),
        id=str(record.get("id") or ""),
        name=name,
        sku=sku,
        category=category,
    )


def parse_settings(record: Optional[dict], defaults: Optional[Settings] = None) -> Settings:
    """Builds organization Settings, falling back to defaults per field."""
    record = record or {}

    def _flag(key: str, fallback: bool) -> bool:
        value = record.get(key)
        if value is None:
            return fallback
        if not isinstance(value, bool):
            raise DataIntegrityError(f"{key} must be a boolean: {value!r}")
        return value

    def _field(key: str, fallback: Optional[int]) -> int:
        value = _non_negative_int(record, key, required=fallback is None)
        return fallback if value is None else value

    return Settings(
        expiration_warning_days=_field(
            "expirationWarningDays",
            defaults.expiration_warning_days if defaults else None,
        ),
        low_stock_threshold=_field(
            "lowStockThreshold",
            defaults.low_stock_threshold if defaults else None,
        ),
        honor_zero_reorder_threshold=_flag(
            "honorZeroReorderThreshold",
            defaults.honor_zero_reorder_threshold if defaults else False,
        ),
    )
