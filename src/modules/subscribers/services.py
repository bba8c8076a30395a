"""Subscription service layer.

Manages who gets told when a product is back in stock.  Writes here are
independent of the restock rule, which only reads the directory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

import structlog
from django.db import transaction

from modules.products.exceptions import ProductNotFound
from modules.subscribers.exceptions import SubscriptionNotFound

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository
    from modules.subscribers.dtos import SubscribeDTO
    from modules.subscribers.models import Subscriber, Subscription
    from modules.subscribers.repositories.interfaces import ISubscriberRepository

logger = structlog.get_logger(__name__)


class SubscriptionService:
    def __init__(
        self,
        repository: ISubscriberRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._repo = repository
        self._products = product_repository

    def _get_product(self, product_id: str) -> Product:
        product = self._products.get_by_id(product_id)
        if not product:
            raise ProductNotFound(f"Product {product_id} not found.")
        return product

    @transaction.atomic
    def subscribe(self, product_id: str, dto: SubscribeDTO) -> Tuple[Subscription, bool]:
        """Subscribe ``dto.email`` to restock notifications for a product.

        Subscribing twice is harmless: the existing subscription is
        returned with ``created=False``.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_product(product_id)
        subscriber = self._repo.get_or_create(dto.email)
        subscription, created = self._repo.subscribe(product, subscriber)
        logger.info(
            "subscription.created" if created else "subscription.already_exists",
            product_id=str(product.id),
            subscriber_id=str(subscriber.id),
        )
        return subscription, created

    @transaction.atomic
    def unsubscribe(self, product_id: str, email: str) -> None:
        """Stop notifying ``email`` about a product.

        Raises:
            ProductNotFound: if the product does not exist.
            SubscriptionNotFound: if ``email`` is not subscribed to it.
        """
        product = self._get_product(product_id)
        if not self._repo.unsubscribe(product, email):
            raise SubscriptionNotFound(
                f"{email} is not subscribed to product {product_id}."
            )

    def list_subscribers(self, product_id: str) -> List[Subscriber]:
        product = self._get_product(product_id)
        return sorted(self._repo.subscribers_of(product), key=lambda s: s.email)
