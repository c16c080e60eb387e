"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Every method is a coroutine: implementations may await I/O and
callers may be cancelled at any of these suspension points.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``CatalogProduct``).
    """

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    async def add(self, entity: T) -> None:
        """Persist a new entity."""
