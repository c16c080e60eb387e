"""In-process implementation of the catalog product repository.

Used for local wiring and tests.  Enforces SKU uniqueness on ``add``
exactly like the storage constraint does.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional
from uuid import UUID

from modules.catalog.entities import CatalogProduct
from modules.catalog.exceptions import ProductSkuConflict
from modules.catalog.repositories.interfaces import IProductRepository
from modules.catalog.validation import normalize_sku


class InMemoryProductRepository(IProductRepository):
    def __init__(self, products: Optional[List[CatalogProduct]] = None) -> None:
        self._lock = asyncio.Lock()
        self._by_id: Dict[UUID, CatalogProduct] = {}
        self._by_sku: Dict[str, UUID] = {}
        for product in products or []:
            self._by_id[product.id] = product
            self._by_sku[normalize_sku(product.sku)] = product.id

    async def get_by_id(self, id: UUID) -> Optional[CatalogProduct]:
        return self._by_id.get(id)

    async def get_by_sku(self, sku: str) -> Optional[CatalogProduct]:
        product_id = self._by_sku.get(normalize_sku(sku))
        return self._by_id.get(product_id) if product_id else None

    async def add(self, entity: CatalogProduct) -> None:
        sku = normalize_sku(entity.sku)
        async with self._lock:
            if sku in self._by_sku:
                raise ProductSkuConflict(entity.sku)
            self._by_id[entity.id] = entity
            self._by_sku[sku] = entity.id

    def __len__(self) -> int:
        return len(self._by_id)
