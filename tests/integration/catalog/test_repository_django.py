"""Tests for ProductDjangoRepository against the test database.

Repository coroutines are driven with ``async_to_sync`` so the ORM runs
on the test's own connection and transaction.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
import uuid6
from asgiref.sync import async_to_sync

from modules.catalog.entities import CatalogProduct
from modules.catalog.exceptions import ProductSkuConflict
from modules.catalog.models import ProductRecord
from modules.catalog.repositories.django_repository import ProductDjangoRepository

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def _make_product(**overrides) -> CatalogProduct:
    defaults = {
        "id": uuid6.uuid7(),
        "name": "Quantum Super Display",
        "brand": "Nova Tech",
        "sku": "ELEC-QSD-001",
        "category": "Electronics",
        "price": Decimal("999.99"),
        "release_date": datetime(2026, 3, 28, tzinfo=timezone.utc),
        "created_at": datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc),
        "image_url": "https://example.com/image.jpg",
        "is_available": True,
        "stock_quantity": 15,
    }
    defaults.update(overrides)
    return CatalogProduct(**defaults)


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestProductDjangoRepository:
    def test_add_then_get_by_id(self, repo):
        product = _make_product()

        async_to_sync(repo.add)(product)
        loaded = async_to_sync(repo.get_by_id)(product.id)

        assert loaded is not None
        assert loaded.id == product.id
        assert loaded.sku == "ELEC-QSD-001"
        assert loaded.price == Decimal("999.99")
        assert loaded.release_date == product.release_date
        assert loaded.created_at == product.created_at
        assert loaded.updated_at is None
        assert ProductRecord.objects.count() == 1

    def test_get_by_id_missing(self, repo):
        assert async_to_sync(repo.get_by_id)(uuid6.uuid7()) is None

    def test_get_by_sku_normalizes_input(self, repo):
        product = _make_product()
        async_to_sync(repo.add)(product)

        loaded = async_to_sync(repo.get_by_sku)(" elec-qsd-001 ")

        assert loaded is not None
        assert loaded.id == product.id

    def test_get_by_sku_missing(self, repo):
        assert async_to_sync(repo.get_by_sku)("NOPE-00001") is None

    def test_duplicate_sku_raises_conflict(self, repo):
        async_to_sync(repo.add)(_make_product())

        with pytest.raises(ProductSkuConflict) as excinfo:
            async_to_sync(repo.add)(_make_product(name="Another Display"))

        assert excinfo.value.sku == "ELEC-QSD-001"
        assert ProductRecord.objects.count() == 1

    def test_null_image_round_trips(self, repo):
        product = _make_product(image_url=None, category="Home", sku="HOME-CAN-001")
        async_to_sync(repo.add)(product)

        loaded = async_to_sync(repo.get_by_id)(product.id)

        assert loaded.image_url is None
        assert loaded.category == "Home"
