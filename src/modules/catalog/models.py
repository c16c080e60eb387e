"""Catalog product storage model.

``sku`` carries ``unique=True``: the UNIQUE INDEX is the authoritative
guard against duplicate SKUs.  The validation-time look-up is only an
early rejection and can lose a race against a concurrent insert.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.catalog.constants import ProductCategory
from modules.catalog.entities import CatalogProduct
from modules.core.models import BaseModel


class ProductRecord(BaseModel):
    name = models.CharField(max_length=200)
    brand = models.CharField(max_length=100)
    sku = models.CharField(max_length=20, unique=True)
    category = models.CharField(max_length=32, choices=ProductCategory.choices)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    release_date = models.DateTimeField()
    image_url = models.CharField(max_length=2048, null=True, blank=True, default=None)  # noqa: DJ01
    is_available = models.BooleanField(default=True)
    stock_quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "catalog_products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category"], name="catalog_category_idx"),
        ]

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @classmethod
    def from_entity(cls, product: CatalogProduct) -> ProductRecord:
        return cls(
            id=product.id,
            name=product.name,
            brand=product.brand,
            sku=product.sku,
            category=product.category,
            price=product.price,
            release_date=product.release_date,
            created_at=product.created_at,
            updated_at=product.updated_at,
            image_url=product.image_url,
            is_available=product.is_available,
            stock_quantity=product.stock_quantity,
        )

    def to_entity(self) -> CatalogProduct:
        return CatalogProduct(
            id=self.id,
            name=self.name,
            brand=self.brand,
            sku=self.sku,
            category=self.category,
            price=self.price,
            release_date=self.release_date,
            created_at=self.created_at,
            updated_at=self.updated_at,
            image_url=self.image_url,
            is_available=self.is_available,
            stock_quantity=self.stock_quantity,
        )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
