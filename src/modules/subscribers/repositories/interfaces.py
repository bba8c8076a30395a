"""Subscriber repository interface (the subscriber directory).

Extends ``IRepository[Subscriber]`` with the product/subscriber
association look-ups used by the restock rule and the subscription API.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Set, Tuple

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.subscribers.models import Subscriber, Subscription


class ISubscriberRepository(IRepository["Subscriber"]):
    """Repository contract for subscribers and their subscriptions."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Subscriber]":
        """List subscribers with optional filters."""

    @abstractmethod
    def subscribers_of(self, product: Product) -> Set[Subscriber]:
        """Return the subscribers currently linked to ``product``.

        Always reads the live association table; nothing is cached
        between calls.

        Raises:
            SubscriberLookupError: if the store cannot be read.
        """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Subscriber]:
        """Retrieve a subscriber by (normalised) email address."""

    @abstractmethod
    def get_or_create(self, email: str) -> Subscriber:
        """Return the subscriber for ``email``, creating it if needed."""

    @abstractmethod
    def subscribe(
        self, product: Product, subscriber: Subscriber
    ) -> Tuple[Subscription, bool]:
        """Link ``subscriber`` to ``product``.

        Returns the subscription and whether it was newly created.
        """

    @abstractmethod
    def unsubscribe(self, product: Product, email: str) -> bool:
        """Remove the link between ``product`` and ``email``.

        Returns ``False`` if no such subscription exists.
        """
