"""Catalog service layer (Use Cases).

``CreateProductHandler`` runs one product creation end to end:

1. Validate the request (field rules, then advisory SKU uniqueness).
2. Build the ``CatalogProduct`` (identity + creation timestamp).
3. Persist it through the injected ``IProductRepository``.
4. Invalidate the "all products" cache key.
5. Project the stored product into a ``ProductProfile``.
6. Emit one ``CreationMetrics`` event with per-phase durations.

The handler never retries and holds no locks; concurrent writers are
arbitrated by the repository's uniqueness constraint.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional
from uuid import UUID

from modules.catalog.builders import build_product
from modules.catalog.constants import (
    ALL_PRODUCTS_CACHE_KEY,
    CANCELLED_REASON,
    VALIDATION_FAILURE_REASON,
)
from modules.catalog.display import build_profile
from modules.catalog.exceptions import (
    ProductCreationError,
    ProductNotFound,
    ProductValidationError,
)
from modules.catalog.metrics import CreationMetrics, Stopwatch
from modules.catalog.telemetry import OperationContext, ProductTelemetry

if TYPE_CHECKING:
    from modules.catalog.cache import ICacheInvalidator
    from modules.catalog.dtos import CreateProductRequest, ProductProfile
    from modules.catalog.repositories.interfaces import IProductRepository
    from modules.catalog.validation import ProductValidator


class CreateProductHandler:
    """Application service for the product creation use-case.

    Receives its collaborators via constructor injection (DIP).
    ``clock`` is consulted for the age bucket of the returned profile.
    """

    def __init__(
        self,
        repository: IProductRepository,
        validator: ProductValidator,
        cache: ICacheInvalidator,
        telemetry: Optional[ProductTelemetry] = None,
        currency_symbol: str = "$",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._repo = repository
        self._validator = validator
        self._cache = cache
        self._telemetry = telemetry or ProductTelemetry()
        self._currency_symbol = currency_symbol
        self._clock = clock

    async def handle(
        self,
        request: CreateProductRequest,
        correlation_id: Optional[str] = None,
    ) -> ProductProfile:
        """Create a product and return its display profile.

        Raises:
            ProductValidationError: one or more field rules failed.
            ProductSkuConflict: storage rejected the SKU as a duplicate.
            ProductCreationError: any other collaborator failure.
        """
        ctx = OperationContext.start(correlation_id)
        total = Stopwatch.start_new()
        validation = Stopwatch()
        persistence = Stopwatch()

        def metrics(error_reason: Optional[str] = None) -> CreationMetrics:
            total.stop()
            return CreationMetrics(
                operation_id=ctx.operation_id,
                product_name=request.name,
                sku=request.sku,
                category=request.category,
                validation_duration_ms=validation.elapsed_ms,
                persistence_duration_ms=persistence.elapsed_ms,
                total_duration_ms=total.elapsed_ms,
                error_reason=error_reason,
            )

        self._telemetry.creation_started(ctx, request)

        try:
            validation.start()
            result = await self._validator.validate(request)
            validation.stop()
            if not result.is_valid:
                raise ProductValidationError(result.errors)

            product = build_product(request)

            persistence.start()
            self._telemetry.persistence_started(ctx, product.id)
            await self._repo.add(product)
            self._telemetry.persistence_completed(ctx, product.id)
            persistence.stop()

            self._cache.invalidate(ALL_PRODUCTS_CACHE_KEY)
            self._telemetry.cache_invalidated(ctx, ALL_PRODUCTS_CACHE_KEY)

            profile = build_profile(
                product,
                now=self._clock() if self._clock else None,
                currency_symbol=self._currency_symbol,
            )
        except ProductValidationError:
            validation.stop()
            self._telemetry.creation_metrics(ctx, metrics(VALIDATION_FAILURE_REASON))
            raise
        except asyncio.CancelledError:
            validation.stop()
            persistence.stop()
            self._telemetry.creation_metrics(ctx, metrics(CANCELLED_REASON))
            self._telemetry.creation_cancelled(ctx, request.sku)
            raise
        except Exception as exc:
            validation.stop()
            persistence.stop()
            self._telemetry.creation_metrics(ctx, metrics(str(exc) or type(exc).__name__))
            self._telemetry.creation_error(ctx, request.sku, exc)
            if isinstance(exc, ProductCreationError):
                exc.operation_id = ctx.operation_id
                raise
            raise ProductCreationError(
                f"Product creation failed: {exc}", ctx.operation_id
            ) from exc

        self._telemetry.creation_metrics(ctx, metrics())
        return profile


class ProductProfileService:
    """Read-side use-case: recompute a stored product's display profile."""

    def __init__(
        self,
        repository: IProductRepository,
        currency_symbol: str = "$",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._repo = repository
        self._currency_symbol = currency_symbol
        self._clock = clock

    async def get_profile(self, id: UUID) -> ProductProfile:
        """Retrieve a product and build its profile as of now.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = await self._repo.get_by_id(id)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        return build_profile(
            product,
            now=self._clock() if self._clock else None,
            currency_symbol=self._currency_symbol,
        )
