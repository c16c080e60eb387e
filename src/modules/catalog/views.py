"""Catalog API views.

Exposes the catalog use-cases via HTTP using a DRF ViewSet.  The
handlers are coroutines; the view drives them with ``async_to_sync``.
Domain exceptions are caught and translated into HTTP status codes;
the view never swallows generic exceptions.
"""

from __future__ import annotations

from uuid import UUID

from asgiref.sync import async_to_sync
from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.catalog.cache import DjangoCacheInvalidator
from modules.catalog.dtos import CreateProductRequest
from modules.catalog.exceptions import (
    ProductCreationError,
    ProductNotFound,
    ProductSkuConflict,
    ProductValidationError,
)
from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.catalog.services import CreateProductHandler, ProductProfileService
from modules.catalog.validation import build_product_validator

NON_FIELD_ERRORS = "non_field_errors"


def field_errors_from_pydantic(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field, like ``ProductValidationError.as_dict``."""
    grouped: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error["loc"]
        field = str(loc[0]) if loc else NON_FIELD_ERRORS
        grouped.setdefault(field, []).append(error["msg"])
    return grouped


class ProductViewSet(ViewSet):
    """Create a catalog product and read back its display profile."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        catalog = settings.CATALOG
        repository = ProductDjangoRepository()
        self._create_handler = CreateProductHandler(
            repository=repository,
            validator=build_product_validator(
                repository,
                price_min=catalog["PRICE_MIN"],
                price_max=catalog["PRICE_MAX"],
                allowed_categories=catalog["ALLOWED_CATEGORIES"],
                currency_symbol=catalog["CURRENCY_SYMBOL"],
            ),
            cache=DjangoCacheInvalidator(),
            currency_symbol=catalog["CURRENCY_SYMBOL"],
        )
        self._profile_service = ProductProfileService(
            repository=repository,
            currency_symbol=catalog["CURRENCY_SYMBOL"],
        )

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductRequest.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response(
                {"errors": field_errors_from_pydantic(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            profile = async_to_sync(self._create_handler.handle)(
                dto, correlation_id=getattr(request, "correlation_id", None)
            )
        except ProductValidationError as exc:
            return Response(
                {"errors": exc.as_dict()},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except ProductSkuConflict as exc:
            return Response(
                {"detail": str(exc), "operation_id": exc.operation_id},
                status=status.HTTP_409_CONFLICT,
            )
        except ProductCreationError as exc:
            return Response(
                {"detail": "Product creation failed.", "operation_id": exc.operation_id},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            profile.model_dump(mode="json"),
            status=status.HTTP_201_CREATED,
            headers={"Location": f"/api/v1/products/{profile.id}/"},
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        not_found = Response(
            {"detail": "Product not found."},
            status=status.HTTP_404_NOT_FOUND,
        )
        try:
            product_id = UUID(str(pk))
        except ValueError:
            return not_found
        try:
            profile = async_to_sync(self._profile_service.get_profile)(product_id)
        except ProductNotFound:
            return not_found
        return Response(profile.model_dump(mode="json"))
