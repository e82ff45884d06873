"""
Tests for the in-process data providers

- Product catalog lookups and searches
- Shipping cost calculation
- Seeded shipping, package and order records
"""

import zlib
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from gadgetsinc.services.data.catalog import CatalogStore, Product, build_default_catalog
from gadgetsinc.services.data.shipping import (
    ORDER_STATUSES,
    SHIPPING_STATUSES,
    ShippingDirectory,
    shipping_cost,
    stable_seed,
)


# =============================================================================
# Catalog
# =============================================================================

class TestCatalogStore:
    """Tests for CatalogStore lookups."""

    def test_ten_products_numbered_1001_to_1010(self, catalog):
        assert catalog.product_numbers() == list(range(1001, 1011))

    def test_get_product_returns_seeded_record(self, catalog):
        product = catalog.get_product(1001)

        assert product.name == "GadgetsInc Smartphone X1"
        assert product.price == Decimal("899.00")
        assert product.tags == ("smartphone", "5G", "AI", "camera", "mobile")
        assert product.category == "Electronics"

    def test_get_unknown_product_returns_none(self, catalog):
        assert catalog.get_product(42) is None

    def test_summary_line(self, catalog):
        assert catalog.get_product(1002).summary == (
            "GadgetsInc Laptop Pro - High-performance laptop with 16GB RAM, 1TB SSD, "
            "and 15-hour battery. Price: $1,299"
        )

    def test_product_lines_map_to_products(self, catalog):
        assert catalog.product_line_keys() == ["smartphone", "laptop", "smartwatch", "headphones", "tablet"]
        assert catalog.product_for_line("Tablet").product_number == 1005
        assert catalog.product_for_line("drone") is None

    def test_stock_lookup_is_case_insensitive(self, catalog):
        entry = catalog.stock_for("LAPTOP")

        assert entry.units == 43
        assert entry.status == "In Stock"

    def test_support_topics(self, catalog):
        assert catalog.support_topic_keys() == ["warranty", "return", "repair", "shipping", "payment", "contact"]
        assert "2-year manufacturer warranty" in catalog.support_topic("warranty")

    def test_unknown_product_line_rejected_at_construction(self):
        product = Product(1, "Thing", "A thing", Decimal("1.00"), ("thing",), "Misc")

        with pytest.raises(ValueError):
            CatalogStore([product], {"gizmo": 2}, [], {})


class TestCatalogSearch:
    """Tests for search and tag search."""

    def test_search_matches_name_and_description(self, catalog):
        assert [p.product_number for p in catalog.search("smartphone")] == [1001]

    def test_search_is_case_insensitive_and_sorted(self, catalog):
        assert [p.product_number for p in catalog.search("CAMERA")] == [1001, 1006, 1009]

    def test_search_matches_category(self, catalog):
        assert [p.product_number for p in catalog.search("electronics")] == [1001, 1002, 1005]

    def test_search_without_match(self, catalog):
        assert catalog.search("refrigerator") == []

    def test_search_tags_lists_matched_tags(self, catalog):
        matches = catalog.search_tags("wireless")

        assert [m.product.product_number for m in matches] == [1004, 1010]
        assert all(m.matched_tags == ("wireless",) for m in matches)

    def test_search_tags_substring(self, catalog):
        matches = catalog.search_tags("4k")

        assert [m.product.product_number for m in matches] == [1006, 1009]
        assert matches[0].matched_tags == ("4K",)

    def test_all_tags_sorted_and_distinct(self, catalog):
        tags = catalog.all_tags()

        assert len(tags) == len(set(tags))
        assert tags == sorted(tags, key=lambda t: (t.casefold(), t))
        assert "wireless" in tags and "accessories" in tags


# =============================================================================
# Shipping
# =============================================================================

class TestShippingCost:
    """Tests for shipping_cost."""

    @pytest.mark.parametrize("weight,destination,expected", [
        (1.5, "domestic", "9.74"),
        (2, "europe", "24.99"),
        (3, "Canada", "20.49"),
        (1, "asia", "27.49"),
        (1, "usa", "8.49"),
        (1, "mars", "32.49"),
    ])
    def test_base_rate_plus_weight(self, weight, destination, expected):
        assert shipping_cost(weight, destination) == Decimal(expected)


class TestShippingDirectory:
    """Tests for the seeded shipping records."""

    def test_stable_seed(self):
        assert stable_seed(1234) == 1234
        assert stable_seed("PKG1") == zlib.crc32(b"PKG1")

    def test_shipping_record_is_deterministic(self, shipping_directory, fixed_clock):
        other = ShippingDirectory(clock=fixed_clock)

        assert shipping_directory.shipping(1234) == other.shipping(1234)

    def test_shipping_record_fields(self, shipping_directory):
        record = shipping_directory.shipping(1234)
        today = date(2026, 3, 14)

        assert record.status in SHIPPING_STATUSES
        assert record.tracking_number.startswith(record.carrier.upper())
        assert today - timedelta(days=9) <= record.shipped_date <= today - timedelta(days=1)
        assert 3 <= (record.expected_delivery - record.shipped_date).days <= 6

    def test_package_record_ranges(self, shipping_directory):
        record = shipping_directory.package("PKG123456")

        assert 0.5 <= record.weight_lbs <= 50.5
        assert 6 <= record.length_in < 36
        assert 4 <= record.width_in < 24
        assert 2 <= record.height_in < 18
        assert 50 <= record.insurance_value < 2000
        assert record.last_scanned < datetime(2026, 3, 14, 9, 30)

    def test_order_tracking(self, shipping_directory):
        order = shipping_directory.order("ORD123456")

        assert order.status in ORDER_STATUSES
        assert order.tracking_number.startswith(order.carrier)
        assert order.as_of == date(2026, 3, 14)
        assert shipping_directory.order("ORD123456") == order

    def test_search_returns_one_to_five_lines(self, shipping_directory):
        lines = shipping_directory.search("Seattle")

        assert 1 <= len(lines) <= 5
        assert shipping_directory.search("Seattle") == lines
        assert all(line.startswith(("Shipping #", "Package PKG")) for line in lines)


def test_default_catalog_is_fresh_each_time():
    assert build_default_catalog() is not build_default_catalog()
