"""Catalog product repository interface.

Extends ``IRepository[CatalogProduct]`` with the SKU look-up used by the
advisory uniqueness rule.  Implementations must be safe for concurrent
use and must reject a duplicate SKU on ``add`` with
``ProductSkuConflict``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.entities import CatalogProduct


class IProductRepository(IRepository["CatalogProduct"]):
    """Repository contract for catalog products."""

    @abstractmethod
    async def get_by_sku(self, sku: str) -> Optional[CatalogProduct]:
        """Retrieve a product by its normalized SKU."""
