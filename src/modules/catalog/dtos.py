"""Catalog DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductRequest``: untrusted input for product creation.
  Pydantic only coerces types here; business rules run in
  ``modules.catalog.validation`` so every violation is reported per field.
- ``ProductProfile``: the read-only display projection returned to callers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CreateProductRequest(BaseModel):
    """Immutable DTO for product creation requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    brand: str
    sku: str
    category: str
    price: Decimal
    release_date: datetime
    image_url: Optional[str] = None
    stock_quantity: int = 1

    @field_validator("name", "brand", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("release_date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("image_url")
    @classmethod
    def blank_image_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductProfile(BaseModel):
    """Immutable display projection of a catalog product.

    ``price`` and ``formatted_price`` always carry the same
    (post-discount) amount.  Never persisted.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    brand: str
    sku: str
    category_display_name: str
    price: Decimal
    formatted_price: str
    release_date: datetime
    created_at: datetime
    image_url: Optional[str]
    is_available: bool
    stock_quantity: int
    product_age: str
    brand_initials: str
    availability_status: str
