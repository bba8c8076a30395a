"""Django ORM implementation of the subscriber directory.

Satisfies ``ISubscriberRepository`` using Django's QuerySet API.
Look-ups return ``None`` for missing rows; only ``subscribers_of``
raises, translating database failures into ``SubscriberLookupError``
so callers on the notification path can contain them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Set, Tuple

import structlog

from django.core.exceptions import ValidationError
from django.db import DatabaseError, models, transaction

from modules.products.models import Product
from modules.subscribers.exceptions import SubscriberLookupError
from modules.subscribers.models import Subscriber, Subscription
from modules.subscribers.repositories.interfaces import ISubscriberRepository

logger = structlog.get_logger(__name__)


class SubscriberDjangoRepository(ISubscriberRepository):
    """Concrete subscriber directory backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Subscriber]:
        try:
            return Subscriber.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Subscriber]:
        queryset = Subscriber.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Subscriber) -> Subscriber:
        entity.save()
        logger.info("subscriber.saved", subscriber_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete a subscriber and all of its subscriptions."""
        subscriber = self.get_by_id(id)
        if not subscriber:
            return False
        subscriber.delete()
        logger.info("subscriber.deleted", subscriber_id=str(id))
        return True

    def subscribers_of(self, product: Product) -> Set[Subscriber]:
        try:
            return set(Subscriber.objects.filter(subscriptions__product_id=product.id))
        except DatabaseError as exc:
            raise SubscriberLookupError(
                f"Could not load subscribers of product {product.id}."
            ) from exc

    def get_by_email(self, email: str) -> Optional[Subscriber]:
        return Subscriber.objects.filter(email=email.strip().lower()).first()

    @transaction.atomic
    def get_or_create(self, email: str) -> Subscriber:
        subscriber, created = Subscriber.objects.get_or_create(
            email=email.strip().lower()
        )
        if created:
            logger.info("subscriber.created", subscriber_id=str(subscriber.id))
        return subscriber

    @transaction.atomic
    def subscribe(
        self, product: Product, subscriber: Subscriber
    ) -> Tuple[Subscription, bool]:
        subscription, created = Subscription.objects.get_or_create(
            product=product,
            subscriber=subscriber,
        )
        logger.info(
            "subscription.saved",
            product_id=str(product.id),
            subscriber_id=str(subscriber.id),
            created=created,
        )
        return subscription, created

    @transaction.atomic
    def unsubscribe(self, product: Product, email: str) -> bool:
        deleted, _ = Subscription.objects.filter(
            product=product,
            subscriber__email=email.strip().lower(),
        ).delete()
        if deleted:
            logger.info("subscription.deleted", product_id=str(product.id))
        return bool(deleted)
