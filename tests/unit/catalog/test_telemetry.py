"""Unit tests for the product creation telemetry sink."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.catalog.dtos import CreateProductRequest
from modules.catalog.metrics import CreationMetrics
from modules.catalog.telemetry import OperationContext, ProductTelemetry, new_operation_id

pytestmark = pytest.mark.unit


def _make_metrics(error_reason=None) -> CreationMetrics:
    return CreationMetrics(
        operation_id="ABCD1234",
        product_name="Widget",
        sku="WID-00001",
        category="Books",
        validation_duration_ms=1.5,
        persistence_duration_ms=2.25,
        total_duration_ms=4.0,
        error_reason=error_reason,
    )


@pytest.fixture()
def ctx():
    return OperationContext(operation_id="ABCD1234", correlation_id="cid-1")


@pytest.fixture()
def log():
    return MagicMock()


class TestOperationContext:
    def test_operation_id_shape(self):
        op_id = new_operation_id()
        assert len(op_id) == 8
        assert op_id == op_id.upper()

    def test_start_keeps_correlation_id(self):
        ctx = OperationContext.start("cid-xyz")
        assert ctx.correlation_id == "cid-xyz"
        assert len(ctx.operation_id) == 8

    def test_start_generates_correlation_id(self):
        assert OperationContext.start().correlation_id


class TestProductTelemetry:
    def test_events_bound_to_context(self, ctx, log):
        ProductTelemetry(log).cache_invalidated(ctx, "all_products")

        log.bind.assert_called_once_with(operation_id="ABCD1234", correlation_id="cid-1")
        log.bind.return_value.debug.assert_called_once_with(
            "product.cache_invalidated", cache_key="all_products"
        )

    def test_creation_started_fields(self, ctx, log):
        request = CreateProductRequest(
            name="Widget",
            brand="Acme",
            sku="WID-00001",
            category="Books",
            price=Decimal("9.99"),
            release_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        ProductTelemetry(log).creation_started(ctx, request)

        log.bind.return_value.info.assert_called_once_with(
            "product.creation_started",
            name="Widget",
            brand="Acme",
            category="Books",
            sku="WID-00001",
        )

    def test_persistence_events_at_debug(self, ctx, log):
        product_id = uuid4()
        telemetry = ProductTelemetry(log)

        telemetry.persistence_started(ctx, product_id)
        telemetry.persistence_completed(ctx, product_id)

        bound = log.bind.return_value
        assert [c.args[0] for c in bound.debug.call_args_list] == [
            "product.persistence_started",
            "product.persistence_completed",
        ]
        assert bound.debug.call_args.kwargs["product_id"] == str(product_id)

    def test_success_metrics_at_info(self, ctx, log):
        ProductTelemetry(log).creation_metrics(ctx, _make_metrics())

        bound = log.bind.return_value
        bound.info.assert_called_once()
        bound.warning.assert_not_called()
        event, fields = bound.info.call_args.args[0], bound.info.call_args.kwargs
        assert event == "product.creation_completed"
        assert fields["success"] is True
        assert fields["total_duration_ms"] == 4.0
        assert "operation_id" not in fields

    def test_failure_metrics_at_warning(self, ctx, log):
        ProductTelemetry(log).creation_metrics(ctx, _make_metrics("Validation Failure"))

        bound = log.bind.return_value
        bound.info.assert_not_called()
        bound.error.assert_not_called()
        bound.warning.assert_called_once()
        assert bound.warning.call_args.args[0] == "product.creation_failed"
        assert bound.warning.call_args.kwargs["error_reason"] == "Validation Failure"

    def test_creation_error_carries_exception(self, ctx, log):
        exc = RuntimeError("boom")

        ProductTelemetry(log).creation_error(ctx, "WID-00001", exc)

        log.bind.return_value.error.assert_called_once_with(
            "product.creation_error", sku="WID-00001", error="boom", exc_info=exc
        )

    def test_creation_cancelled(self, ctx, log):
        ProductTelemetry(log).creation_cancelled(ctx, "WID-00001")

        log.bind.return_value.warning.assert_called_once_with(
            "product.creation_cancelled", sku="WID-00001"
        )


class TestProductTelemetryLogging:
    def test_metrics_reach_stdlib_logging(self, ctx, caplog):
        with caplog.at_level(logging.INFO):
            ProductTelemetry().creation_metrics(ctx, _make_metrics())

        messages = [record.getMessage() for record in caplog.records]
        assert any(
            "product.creation_completed" in m and "ABCD1234" in m and "cid-1" in m
            for m in messages
        ), messages
