"""Inventory summary, waste report and list helper unit tests."""

import random
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from supplr.engine.summary import (
    filter_by_status,
    items_needing_attention,
    search_items,
    status_badge_variant,
    status_label,
    summarize,
    waste_report,
)
from supplr.errors import DataIntegrityError
from supplr.models.inventory import InventoryStatus, InventorySummary, Item, ItemWithStatus

NOW = datetime(2025, 6, 1, 12, 0, 0)


def _entry(
    status=InventoryStatus.OK,
    unit_cost="10",
    quantity=1,
    expires_in=timedelta(days=365),
    **kwargs,
) -> ItemWithStatus:
    item = Item(
        quantity=quantity,
        unit_cost=Decimal(unit_cost),
        expiration_date=NOW + expires_in,
        **kwargs,
    )
    return ItemWithStatus(item=item, status=status)


class TestSummarize:
    """Dashboard totals."""

    def test_empty_inventory(self):
        summary = summarize([])
        assert summary == InventorySummary()
        assert summary.to_dict() == {
            "totalItems": 0,
            "totalValue": 0,
            "expiringSoon": 0,
            "expired": 0,
            "lowStock": 0,
        }

    def test_value_and_status_counts(self):
        items = [
            _entry(InventoryStatus.OK, unit_cost="10", quantity=2),
            _entry(InventoryStatus.EXPIRED, unit_cost="5", quantity=1),
        ]
        assert summarize(items).to_dict() == {
            "totalItems": 2,
            "totalValue": 25,
            "expiringSoon": 0,
            "expired": 1,
            "lowStock": 0,
        }

    def test_each_status_counted_once(self):
        items = [
            _entry(InventoryStatus.OK),
            _entry(InventoryStatus.LOW_STOCK),
            _entry(InventoryStatus.LOW_STOCK),
            _entry(InventoryStatus.EXPIRING_SOON),
            _entry(InventoryStatus.EXPIRED),
        ]
        summary = summarize(items)
        assert summary.total_items == 5
        assert summary.low_stock == 2
        assert summary.expiring_soon == 1
        assert summary.expired == 1

    def test_decimal_accumulation_is_exact(self):
        items = [_entry(unit_cost="0.10", quantity=1) for _ in range(1000)]
        assert summarize(items).total_value == Decimal("100.00")

    def test_float_unit_costs_sum_exactly(self):
        item = Item(quantity=1, unit_cost=0.1, expiration_date=NOW + timedelta(days=365))
        items = [ItemWithStatus(item=item, status=InventoryStatus.OK) for _ in range(1000)]
        assert summarize(items).total_value == Decimal("100.0")

    def test_non_numeric_unit_cost_raises(self):
        item = Item(quantity=1, unit_cost="ten", expiration_date=NOW)
        with pytest.raises(DataIntegrityError):
            summarize([ItemWithStatus(item=item, status=InventoryStatus.OK)])

    def test_order_independent(self):
        items = [
            _entry(status, unit_cost=cost, quantity=qty)
            for status, cost, qty in [
                (InventoryStatus.OK, "12.35", 3),
                (InventoryStatus.EXPIRED, "0.07", 11),
                (InventoryStatus.LOW_STOCK, "199.99", 2),
                (InventoryStatus.EXPIRING_SOON, "3.33", 7),
                (InventoryStatus.OK, "45.00", 125),
            ]
        ]
        expected = summarize(items)
        shuffled = list(items)
        random.Random(7).shuffle(shuffled)
        assert summarize(shuffled) == expected


class TestWasteReport:
    """Expired stock inside the trailing window."""

    def test_window_excludes_old_expirations(self):
        recent = _entry(InventoryStatus.EXPIRED, unit_cost="20", quantity=3, expires_in=timedelta(days=-10))
        old = _entry(InventoryStatus.EXPIRED, unit_cost="50", quantity=1, expires_in=timedelta(days=-40))

        report = waste_report([recent, old], window_days=30, now=NOW)
        assert report.expired_items == [recent]
        assert report.waste_count == 1
        assert report.total_waste_value == Decimal("60")

    def test_float_unit_cost_waste_value_is_exact(self):
        item = Item(quantity=3, unit_cost=19.99, expiration_date=NOW - timedelta(days=2))
        report = waste_report([ItemWithStatus(item=item, status=InventoryStatus.EXPIRED)], now=NOW)
        assert report.total_waste_value == Decimal("59.97")

    def test_only_expired_status_counts(self):
        expiring = _entry(InventoryStatus.EXPIRING_SOON, expires_in=timedelta(days=2))
        assert waste_report([expiring], now=NOW).waste_count == 0

    def test_cutoff_is_inclusive(self):
        boundary = _entry(InventoryStatus.EXPIRED, expires_in=timedelta(days=-30))
        assert waste_report([boundary], window_days=30, now=NOW).waste_count == 1

    def test_empty_report_serializes(self):
        assert waste_report([], now=NOW).to_dict() == {
            "expiredItems": [],
            "totalWasteValue": 0,
            "wasteCount": 0,
        }

    def test_negative_window_raises(self):
        with pytest.raises(ValueError):
            waste_report([], window_days=-1, now=NOW)


class TestListHelpers:
    """Filtering, search and labels for the inventory views."""

    def _inventory(self):
        return [
            _entry(InventoryStatus.OK, name="Botox 100U", sku="BTX-100", category="Neurotoxins"),
            _entry(InventoryStatus.LOW_STOCK, name="Juvederm Ultra", sku=None, category="Fillers"),
            _entry(InventoryStatus.EXPIRED, name="Lidocaine 1%", sku="LID-01", category="Anesthetics"),
        ]

    def test_filter_all_returns_everything(self):
        assert len(filter_by_status(self._inventory(), "all")) == 3

    def test_filter_by_status_value(self):
        result = filter_by_status(self._inventory(), "low_stock")
        assert [e.item.name for e in result] == ["Juvederm Ultra"]

    def test_search_matches_name_sku_and_category(self):
        inventory = self._inventory()
        assert [e.item.name for e in search_items(inventory, "botox")] == ["Botox 100U"]
        assert [e.item.name for e in search_items(inventory, "lid-0")] == ["Lidocaine 1%"]
        assert [e.item.name for e in search_items(inventory, "  FILLERS ")] == ["Juvederm Ultra"]

    def test_blank_search_returns_everything(self):
        assert len(search_items(self._inventory(), "   ")) == 3

    def test_items_needing_attention(self):
        result = items_needing_attention(self._inventory())
        assert {e.status for e in result} == {InventoryStatus.LOW_STOCK, InventoryStatus.EXPIRED}

    def test_labels_and_badges(self):
        assert status_label(InventoryStatus.OK) == "In Stock"
        assert status_label("expiring_soon") == "Expiring Soon"
        assert status_label("bogus") == "Unknown"
        assert status_badge_variant("expired") == "destructive"
        assert status_badge_variant(InventoryStatus.LOW_STOCK) == "warning"
        assert status_badge_variant("bogus") == "default"
