"""Unit tests for the derived display fields.

Covers:
- Category labels, including the fallback label.
- Price formatting and the Home discount.
- Image suppression for Home products.
- Age buckets and their boundaries.
- Brand initials and availability status.
- build_profile composition and repeatability.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from modules.catalog.display import (
    age_bucket,
    availability_status,
    brand_initials,
    build_profile,
    category_label,
    display_image_url,
    effective_price,
    format_currency,
    formatted_price,
)
from modules.catalog.entities import CatalogProduct

pytestmark = pytest.mark.unit

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _make_product(**overrides) -> CatalogProduct:
    defaults = {
        "id": uuid4(),
        "name": "Quantum Super Display",
        "brand": "Nova Tech",
        "sku": "ELEC-QSD-001",
        "category": "Electronics",
        "price": Decimal("999.99"),
        "release_date": NOW - timedelta(days=65),
        "created_at": NOW,
        "image_url": "https://example.com/image.jpg",
        "is_available": True,
        "stock_quantity": 15,
    }
    defaults.update(overrides)
    return CatalogProduct(**defaults)


# ===========================================================================
# category_label
# ===========================================================================


class TestCategoryLabel:
    @pytest.mark.parametrize(
        ("category", "label"),
        [
            ("Electronics", "Electronics & Technology"),
            ("Clothing", "Clothing & Fashion"),
            ("Books", "Books & Media"),
            ("Home", "Home & Garden"),
        ],
    )
    def test_known_categories(self, category, label):
        assert category_label(_make_product(category=category)) == label

    def test_unknown_category_is_uncategorized(self):
        assert category_label(_make_product(category="Toys")) == "Uncategorized"


# ===========================================================================
# Pricing
# ===========================================================================


class TestPricing:
    def test_non_home_price_unchanged(self):
        product = _make_product(price=Decimal("999.99"))
        assert effective_price(product) == Decimal("999.99")
        assert "999.99" in formatted_price(product)

    def test_home_price_discounted(self):
        product = _make_product(category="Home", price=Decimal("100.00"))
        assert effective_price(product) == Decimal("90.00")
        assert formatted_price(product) == "$90.00"

    def test_discount_applied_once_to_profile(self):
        product = _make_product(category="Home", price=Decimal("100.00"))
        profile = build_profile(product, now=NOW)
        assert profile.price == Decimal("100.00") * Decimal("0.90")
        assert profile.formatted_price == format_currency(profile.price)

    def test_format_currency_groups_thousands(self):
        assert format_currency(Decimal("1234.5")) == "$1,234.50"

    def test_format_currency_rounds_half_up(self):
        assert format_currency(Decimal("10.005")) == "$10.01"

    def test_format_currency_custom_symbol(self):
        assert format_currency(Decimal("5"), "€") == "€5.00"


# ===========================================================================
# display_image_url
# ===========================================================================


class TestImageUrl:
    def test_home_image_suppressed(self):
        product = _make_product(category="Home", image_url="https://example.com/x.jpg")
        assert display_image_url(product) is None

    def test_other_category_image_passed_through(self):
        product = _make_product(image_url="https://example.com/x.jpg")
        assert display_image_url(product) == "https://example.com/x.jpg"

    def test_missing_image_stays_missing(self):
        assert display_image_url(_make_product(image_url=None)) is None


# ===========================================================================
# age_bucket
# ===========================================================================


class TestAgeBucket:
    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (0, "New Release"),
            (10, "New Release"),
            (29, "New Release"),
            (30, "1 month old"),
            (65, "2 months old"),
            (364, "12 months old"),
            (365, "1 year old"),
            (400, "1 year old"),
            (730, "2 years old"),
            (1824, "4 years old"),
            (1825, "Classic"),
            (2000, "Classic"),
        ],
    )
    def test_buckets(self, days, expected):
        product = _make_product(release_date=NOW - timedelta(days=days))
        assert age_bucket(product, NOW) == expected

    def test_partial_day_is_floored(self):
        product = _make_product(release_date=NOW - timedelta(days=29, hours=23))
        assert age_bucket(product, NOW) == "New Release"

    def test_naive_release_date_treated_as_utc(self):
        release = (NOW - timedelta(days=65)).replace(tzinfo=None)
        assert age_bucket(_make_product(release_date=release), NOW) == "2 months old"

    def test_naive_now_treated_as_utc(self):
        product = _make_product(release_date=NOW - timedelta(days=65))
        assert age_bucket(product, NOW.replace(tzinfo=None)) == "2 months old"

    def test_future_release_is_new(self):
        product = _make_product(release_date=NOW + timedelta(days=3))
        assert age_bucket(product, NOW) == "New Release"

    def test_defaults_to_current_time(self):
        product = _make_product(
            release_date=datetime.now(timezone.utc) - timedelta(days=10)
        )
        assert age_bucket(product) == "New Release"


# ===========================================================================
# brand_initials
# ===========================================================================


class TestBrandInitials:
    @pytest.mark.parametrize(
        ("brand", "expected"),
        [
            ("Nova Tech", "NT"),
            ("HomeGoods", "H"),
            ("acme", "A"),
            ("  the   big   company  ", "TC"),
            ("alpha beta gamma", "AG"),
        ],
    )
    def test_initials(self, brand, expected):
        assert brand_initials(_make_product(brand=brand)) == expected

    @pytest.mark.parametrize("brand", ["", "   "])
    def test_blank_brand(self, brand):
        assert brand_initials(_make_product(brand=brand)) == "?"


# ===========================================================================
# availability_status
# ===========================================================================


class TestAvailabilityStatus:
    @pytest.mark.parametrize(
        ("stock", "expected"),
        [
            (0, "Out of Stock"),
            (1, "Last Item"),
            (3, "Limited Stock"),
            (5, "Limited Stock"),
            (6, "In Stock"),
            (50, "In Stock"),
        ],
    )
    def test_by_stock(self, stock, expected):
        product = _make_product(stock_quantity=stock, is_available=stock > 0)
        assert availability_status(product) == expected

    def test_unavailable_flag_wins(self):
        product = _make_product(stock_quantity=50, is_available=False)
        assert availability_status(product) == "Out of Stock"


# ===========================================================================
# build_profile
# ===========================================================================


class TestBuildProfile:
    def test_composes_all_fields(self):
        product = _make_product()
        profile = build_profile(product, now=NOW)

        assert profile.id == product.id
        assert profile.sku == "ELEC-QSD-001"
        assert profile.category_display_name == "Electronics & Technology"
        assert profile.price == Decimal("999.99")
        assert profile.formatted_price == "$999.99"
        assert profile.image_url == "https://example.com/image.jpg"
        assert profile.product_age == "2 months old"
        assert profile.brand_initials == "NT"
        assert profile.availability_status == "In Stock"
        assert profile.created_at == NOW

    def test_same_input_same_output(self):
        product = _make_product()
        assert build_profile(product, now=NOW) == build_profile(product, now=NOW)

    def test_does_not_mutate_product(self):
        product = _make_product(category="Home")
        before = replace(product)
        build_profile(product, now=NOW)
        assert product == before
        assert product.price == Decimal("999.99")
        assert product.image_url == "https://example.com/image.jpg"
