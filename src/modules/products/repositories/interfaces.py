"""Product repository port."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """Products as a lazy queryset, so callers can keep filtering it."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Read the product row under ``SELECT ... FOR UPDATE``.

        Call inside ``transaction.atomic``.  The instance reflects the last
        committed state of the row, which the update path treats as the
        inventory value *before* its own change.
        """
