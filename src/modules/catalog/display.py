"""Derived display fields for catalog products.

Each function takes a ``CatalogProduct`` and returns one presentation
value.  None of them touch storage or mutate the product; the age bucket
is the only one that depends on the clock, and it accepts ``now`` so
callers can pin it.

``build_profile`` composes them into a ``ProductProfile``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Optional

from modules.catalog.constants import (
    CATEGORY_LABELS,
    HOME_DISCOUNT_FACTOR,
    UNCATEGORIZED_LABEL,
    ProductCategory,
)
from modules.catalog.dtos import ProductProfile

if TYPE_CHECKING:
    from modules.catalog.entities import CatalogProduct

_CENTS = Decimal("0.01")


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Render ``amount`` with thousands separators and 2 decimal places."""
    quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if quantized < 0:
        return f"-{symbol}{-quantized:,.2f}"
    return f"{symbol}{quantized:,.2f}"


# ---------------------------------------------------------------------------
# Category-conditional transforms
# ---------------------------------------------------------------------------


def effective_price(product: CatalogProduct) -> Decimal:
    """Listed price: Home products get a 10% discount, applied here only."""
    if product.category == ProductCategory.HOME:
        return product.price * HOME_DISCOUNT_FACTOR
    return product.price


def display_image_url(product: CatalogProduct) -> Optional[str]:
    """Home products never expose an image."""
    if product.category == ProductCategory.HOME:
        return None
    return product.image_url


# ---------------------------------------------------------------------------
# Derived labels
# ---------------------------------------------------------------------------


def category_label(product: CatalogProduct) -> str:
    return CATEGORY_LABELS.get(product.category, UNCATEGORIZED_LABEL)


def formatted_price(product: CatalogProduct, currency_symbol: str = "$") -> str:
    return format_currency(effective_price(product), currency_symbol)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def age_bucket(product: CatalogProduct, now: Optional[datetime] = None) -> str:
    """Bucket the time since release.

    < 30 days: "New Release"; < 365 days: "N month(s) old" (30-day
    months); < 1825 days: "N year(s) old" (365-day years); else "Classic".
    Naive datetimes are read as UTC.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    release = _as_utc(product.release_date)
    days = (now - release).days

    if days < 30:
        return "New Release"
    if days < 365:
        months = days // 30
        return f"{months} month{'' if months == 1 else 's'} old"
    if days < 1825:
        years = days // 365
        return f"{years} year{'' if years == 1 else 's'} old"
    return "Classic"


def brand_initials(product: CatalogProduct) -> str:
    words = [word.strip() for word in product.brand.split() if word.strip()]
    if not words:
        return "?"
    if len(words) == 1:
        return words[0][0].upper()
    return f"{words[0][0]}{words[-1][0]}".upper()


def availability_status(product: CatalogProduct) -> str:
    stock = product.stock_quantity
    if not product.is_available or stock <= 0:
        return "Out of Stock"
    if stock == 1:
        return "Last Item"
    if stock <= 5:
        return "Limited Stock"
    return "In Stock"


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def build_profile(
    product: CatalogProduct,
    *,
    now: Optional[datetime] = None,
    currency_symbol: str = "$",
) -> ProductProfile:
    """Project a product into its display profile."""
    price = effective_price(product)
    return ProductProfile(
        id=product.id,
        name=product.name,
        brand=product.brand,
        sku=product.sku,
        category_display_name=category_label(product),
        price=price,
        formatted_price=format_currency(price, currency_symbol),
        release_date=product.release_date,
        created_at=product.created_at,
        image_url=display_image_url(product),
        is_available=product.is_available,
        stock_quantity=product.stock_quantity,
        product_age=age_bucket(product, now),
        brand_initials=brand_initials(product),
        availability_status=availability_status(product),
    )
