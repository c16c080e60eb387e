"""Map a validated creation request onto a new ``CatalogProduct``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import uuid6

from modules.catalog.entities import CatalogProduct
from modules.catalog.validation import normalize_sku

if TYPE_CHECKING:
    from modules.catalog.dtos import CreateProductRequest


def build_product(
    request: CreateProductRequest, *, now: Optional[datetime] = None
) -> CatalogProduct:
    """Assign identity and creation time; copy the rest of the request.

    Only called after validation succeeds.  ``updated_at`` is left unset
    and ``is_available`` mirrors ``stock_quantity > 0``.
    """
    return CatalogProduct(
        id=uuid6.uuid7(),
        name=request.name,
        brand=request.brand,
        sku=normalize_sku(request.sku),
        category=request.category,
        price=request.price,
        release_date=request.release_date,
        created_at=now or datetime.now(timezone.utc),
        image_url=request.image_url,
        is_available=request.stock_quantity > 0,
        stock_quantity=request.stock_quantity,
    )
