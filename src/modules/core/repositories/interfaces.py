"""Persistence port shared by the catalog modules.

Services receive an ``IRepository`` subclass through their constructor
and never touch the ORM themselves, which lets unit tests hand them a
``MagicMock`` instead of a database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Optional, TypeVar

EntityT = TypeVar("EntityT")


class IRepository(ABC, Generic[EntityT]):
    """Minimal CRUD contract; module interfaces add their own queries."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[EntityT]:
        """Return the entity, or ``None`` for a missing or malformed id."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[EntityT]:
        """Return entities matching ORM-style ``filters`` (all when empty)."""

    @abstractmethod
    def save(self, entity: EntityT) -> EntityT:
        ...

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Return ``True`` if something was deleted."""
