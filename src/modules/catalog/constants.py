"""Catalog domain constants.

Defines category choices, the category display table and the
category-conditional pricing factor.
"""

from decimal import Decimal

from django.db import models


class ProductCategory(models.TextChoices):
    ELECTRONICS = "Electronics", "Electronics"
    CLOTHING = "Clothing", "Clothing"
    BOOKS = "Books", "Books"
    HOME = "Home", "Home"


CATEGORY_LABELS: dict[str, str] = {
    ProductCategory.ELECTRONICS: "Electronics & Technology",
    ProductCategory.CLOTHING: "Clothing & Fashion",
    ProductCategory.BOOKS: "Books & Media",
    ProductCategory.HOME: "Home & Garden",
}

UNCATEGORIZED_LABEL = "Uncategorized"

# Home products are listed at 90% of the stored price.
HOME_DISCOUNT_FACTOR = Decimal("0.90")

ALL_PRODUCTS_CACHE_KEY = "all_products"

VALIDATION_FAILURE_REASON = "Validation Failure"
CANCELLED_REASON = "Cancelled"

SKU_PATTERN = r"^[A-Za-z0-9-]{5,20}$"

NAME_MAX_LENGTH = 200
BRAND_MAX_LENGTH = 100

PRICE_DECIMAL_PLACES = 2
