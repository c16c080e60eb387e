"""Django ORM implementation of the catalog product repository.

Satisfies ``IProductRepository`` using Django's async QuerySet API.
Look-ups return ``None`` for missing rows; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

import structlog
from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from modules.catalog.entities import CatalogProduct
from modules.catalog.exceptions import ProductSkuConflict
from modules.catalog.models import ProductRecord
from modules.catalog.repositories.interfaces import IProductRepository
from modules.catalog.validation import normalize_sku

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete product repository backed by Django ORM."""

    async def get_by_id(self, id: UUID) -> Optional[CatalogProduct]:
        record = await ProductRecord.objects.filter(id=id).afirst()
        return record.to_entity() if record else None

    async def get_by_sku(self, sku: str) -> Optional[CatalogProduct]:
        """Retrieve a product by SKU (normalised before the query)."""
        record = await ProductRecord.objects.filter(sku=normalize_sku(sku)).afirst()
        return record.to_entity() if record else None

    async def add(self, entity: CatalogProduct) -> None:
        """Insert a new product.

        Raises:
            ProductSkuConflict: the UNIQUE index on ``sku`` rejected the row.
        """
        record = ProductRecord.from_entity(entity)
        try:
            await sync_to_async(self._insert)(record)
        except IntegrityError as exc:
            logger.warning("product.sku_conflict", sku=entity.sku)
            raise ProductSkuConflict(entity.sku) from exc
        logger.info("product.saved", product_id=str(entity.id), sku=entity.sku)

    @transaction.atomic
    def _insert(self, record: ProductRecord) -> None:
        record.save(force_insert=True)
