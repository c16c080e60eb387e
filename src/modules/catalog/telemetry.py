"""Structured lifecycle and metrics events for product creation.

Every event carries the ``operation_id`` and ``correlation_id`` of the
call that produced it.  Both travel explicitly in an
``OperationContext``; nothing is read from context-local state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import structlog

if TYPE_CHECKING:
    from uuid import UUID

    from modules.catalog.dtos import CreateProductRequest
    from modules.catalog.metrics import CreationMetrics

logger = structlog.get_logger(__name__)


def new_operation_id() -> str:
    """Short upper-case id, unique enough to correlate one call's log lines."""
    return uuid.uuid4().hex[:8].upper()


@dataclass(frozen=True)
class OperationContext:
    operation_id: str
    correlation_id: str

    @classmethod
    def start(cls, correlation_id: Optional[str] = None) -> OperationContext:
        return cls(
            operation_id=new_operation_id(),
            correlation_id=correlation_id or str(uuid.uuid4()),
        )


class ProductTelemetry:
    """Telemetry sink for the creation pipeline, backed by structlog."""

    def __init__(self, log: Optional[structlog.stdlib.BoundLogger] = None) -> None:
        self._log = log or logger

    def _bind(self, ctx: OperationContext):
        return self._log.bind(
            operation_id=ctx.operation_id,
            correlation_id=ctx.correlation_id,
        )

    def creation_started(self, ctx: OperationContext, request: CreateProductRequest) -> None:
        self._bind(ctx).info(
            "product.creation_started",
            name=request.name,
            brand=request.brand,
            category=request.category,
            sku=request.sku,
        )

    def persistence_started(self, ctx: OperationContext, product_id: UUID) -> None:
        self._bind(ctx).debug("product.persistence_started", product_id=str(product_id))

    def persistence_completed(self, ctx: OperationContext, product_id: UUID) -> None:
        self._bind(ctx).debug("product.persistence_completed", product_id=str(product_id))

    def cache_invalidated(self, ctx: OperationContext, cache_key: str) -> None:
        self._bind(ctx).debug("product.cache_invalidated", cache_key=cache_key)

    def creation_metrics(self, ctx: OperationContext, metrics: CreationMetrics) -> None:
        """Success at info, failure at warning; never at error."""
        log = self._bind(ctx)
        fields = metrics.as_log_fields()
        fields.pop("operation_id")
        if metrics.success:
            log.info("product.creation_completed", **fields)
        else:
            log.warning("product.creation_failed", **fields)

    def creation_error(self, ctx: OperationContext, sku: str, exc: BaseException) -> None:
        self._bind(ctx).error(
            "product.creation_error",
            sku=sku,
            error=str(exc),
            exc_info=exc,
        )

    def creation_cancelled(self, ctx: OperationContext, sku: str) -> None:
        self._bind(ctx).warning("product.creation_cancelled", sku=sku)
