"""Validation rules for catalog product creation.

Rules are small callables evaluated by ``ProductValidator`` in a fixed
order.  Each synchronous rule receives one request attribute and returns
an error message or ``None``.  Configuration (price bounds, allowed
categories) is passed when a rule is constructed.

Evaluation order:
1. ``name`` required, bounded length.
2. ``brand`` required, bounded length.
3. SKU format.
4. Category allow-list.
5. Price range.
6. Stock quantity non-negative.
7. SKU uniqueness (async) - skipped if any rule above failed.

The uniqueness rule is advisory: it narrows but does not close the
window in which two concurrent requests can both pass it.  The storage
layer's unique constraint is authoritative (``ProductSkuConflict``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, Optional, Protocol, Sequence

import structlog

from modules.catalog.constants import (
    BRAND_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    SKU_PATTERN,
)
from modules.catalog.display import format_currency
from modules.catalog.exceptions import FieldError

if TYPE_CHECKING:
    from modules.catalog.dtos import CreateProductRequest
    from modules.catalog.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_SKU_RE = re.compile(SKU_PATTERN)


def normalize_sku(raw: str) -> str:
    """Remove all whitespace and upper-case the SKU."""
    return "".join(raw.split()).upper()


def _decimal_places(value: Decimal) -> int:
    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0


class FieldRule(Protocol):
    field: str

    def __call__(self, value: Any) -> Optional[str]: ...


# ---------------------------------------------------------------------------
# Synchronous rules
# ---------------------------------------------------------------------------


class RequiredTextRule:
    """Non-blank text no longer than ``max_length``."""

    def __init__(self, field: str, label: str, max_length: int) -> None:
        self.field = field
        self.label = label
        self.max_length = max_length

    def __call__(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return f"{self.label} is required."
        if len(value) > self.max_length:
            return f"{self.label} must be at most {self.max_length} characters."
        return None


class SkuFormatRule:
    """Alphanumeric with hyphens, 5-20 characters once whitespace is removed.

    Empty input is rejected: SKU is a required field.
    """

    field = "sku"
    message = "SKU must be alphanumeric with hyphens and 5-20 characters long."

    def __call__(self, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return self.message
        if _SKU_RE.match("".join(value.split())):
            return None
        return self.message


class CategoryRule:
    field = "category"

    def __init__(self, allowed: Iterable[str]) -> None:
        self.allowed: tuple[str, ...] = tuple(allowed)
        self.message = (
            "Product category must be one of the following: "
            f"{', '.join(self.allowed)}."
        )

    def __call__(self, value: Any) -> Optional[str]:
        if value in self.allowed:
            return None
        return self.message


class PriceRangeRule:
    """Inclusive ``[minimum, maximum]`` price bound, in whole cents."""

    field = "price"

    def __init__(
        self, minimum: Decimal, maximum: Decimal, currency_symbol: str = "$"
    ) -> None:
        if minimum > maximum:
            raise ValueError("Price range minimum must not exceed maximum.")
        self.minimum = minimum
        self.maximum = maximum
        self.message = (
            f"Price must be between {format_currency(minimum, currency_symbol)} "
            f"and {format_currency(maximum, currency_symbol)}."
        )
        self.precision_message = (
            f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places."
        )

    def __call__(self, value: Any) -> Optional[str]:
        if not isinstance(value, Decimal) or not self.minimum <= value <= self.maximum:
            return self.message
        if _decimal_places(value) > PRICE_DECIMAL_PLACES:
            return self.precision_message
        return None


class NonNegativeRule:
    def __init__(self, field: str, label: str) -> None:
        self.field = field
        self.label = label

    def __call__(self, value: Any) -> Optional[str]:
        if isinstance(value, int) and value >= 0:
            return None
        return f"{self.label} cannot be negative."


# ---------------------------------------------------------------------------
# Asynchronous rule
# ---------------------------------------------------------------------------


class SkuUniquenessRule:
    """Reject a SKU that already belongs to a stored product."""

    field = "sku"

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    async def __call__(self, value: str) -> Optional[str]:
        sku = normalize_sku(value)
        if await self._repo.get_by_sku(sku) is not None:
            return f"SKU '{sku}' is already in use."
        return None


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ProductValidator:
    """Runs the synchronous rules, then the uniqueness rule if they all pass."""

    def __init__(
        self,
        rules: Sequence[FieldRule],
        uniqueness_rule: SkuUniquenessRule,
    ) -> None:
        self._rules = tuple(rules)
        self._uniqueness_rule = uniqueness_rule

    async def validate(self, request: CreateProductRequest) -> ValidationResult:
        errors = []
        for rule in self._rules:
            message = rule(getattr(request, rule.field))
            if message is not None:
                errors.append(FieldError(rule.field, message))

        if errors:
            logger.debug(
                "product.validation_short_circuited",
                sku=request.sku,
                failed_rules=len(errors),
            )
            return ValidationResult(tuple(errors))

        message = await self._uniqueness_rule(request.sku)
        if message is not None:
            return ValidationResult((FieldError(self._uniqueness_rule.field, message),))
        return ValidationResult()


def build_product_validator(
    repository: IProductRepository,
    *,
    price_min: Decimal,
    price_max: Decimal,
    allowed_categories: Iterable[str],
    currency_symbol: str = "$",
) -> ProductValidator:
    """Assemble the creation rule set in its documented order."""
    return ProductValidator(
        rules=[
            RequiredTextRule("name", "Name", NAME_MAX_LENGTH),
            RequiredTextRule("brand", "Brand", BRAND_MAX_LENGTH),
            SkuFormatRule(),
            CategoryRule(allowed_categories),
            PriceRangeRule(price_min, price_max, currency_symbol),
            NonNegativeRule("stock_quantity", "Stock quantity"),
        ],
        uniqueness_rule=SkuUniquenessRule(repository),
    )
