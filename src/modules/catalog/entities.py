"""Catalog domain entity.

``CatalogProduct`` is the canonical record handed to the repository.
It is framework-agnostic; the Django repository maps it onto
``ProductRecord`` rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class CatalogProduct:
    """Canonical catalog entry.

    ``id`` and ``created_at`` are assigned once by the builder and never
    change.  ``is_available`` reflects ``stock_quantity > 0`` at creation.
    """

    id: UUID
    name: str
    brand: str
    sku: str
    category: str
    price: Decimal
    release_date: datetime
    created_at: datetime
    image_url: Optional[str] = None
    is_available: bool = True
    stock_quantity: int = 0
    updated_at: Optional[datetime] = None
