"""Restock rule: classify an inventory change and notify subscribers.

The update path calls ``RestockTracker.track`` explicitly with the
inventory value read before the mutation and the value written by it.
Nothing here inspects model state to guess what changed.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Optional

import structlog

from modules.subscribers.exceptions import SubscriberLookupError

if TYPE_CHECKING:
    from modules.notifications.dispatcher import NotificationDispatcher
    from modules.products.models import Product
    from modules.subscribers.repositories.interfaces import ISubscriberRepository

logger = structlog.get_logger(__name__)


class StockTransition(enum.Enum):
    RESTOCKED = "restocked"
    NO_NOTIFICATION = "no_notification"


def classify_stock_change(before: int, after: int) -> StockTransition:
    """``RESTOCKED`` when inventory goes from ``<= 0`` to ``> 0``."""
    if before <= 0 and after > 0:
        return StockTransition.RESTOCKED
    return StockTransition.NO_NOTIFICATION


class RestockTracker:
    """Fires the restock notification for qualifying inventory changes."""

    def __init__(
        self,
        directory: ISubscriberRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._directory = directory
        self._dispatcher = dispatcher

    def track(self, product: Product, before: int, after: int) -> int:
        """Classify ``before -> after`` and dispatch on a restock.

        ``before`` must be the last committed inventory value prior to
        this update.  Returns the number of messages attempted.  A failed
        subscriber look-up is logged and yields ``0``; it never propagates.
        """
        log = logger.bind(product_id=str(product.id), before=before, after=after)

        transition = classify_stock_change(before, after)
        if transition is StockTransition.NO_NOTIFICATION:
            log.debug("restock.not_triggered")
            return 0

        try:
            subscribers = self._directory.subscribers_of(product)
        except SubscriberLookupError as exc:
            log.error("restock.subscriber_lookup_failed", error=str(exc))
            return 0

        log.info("restock.triggered", subscribers=len(subscribers))
        return self._dispatcher.dispatch(product, subscribers)


def build_restock_tracker(
    directory: Optional[ISubscriberRepository] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> RestockTracker:
    """Wire a tracker to the Django-backed directory and mail transport."""
    from modules.notifications.dispatcher import NotificationDispatcher
    from modules.notifications.transport import DjangoMailTransport
    from modules.subscribers.repositories.django_repository import (
        SubscriberDjangoRepository,
    )

    return RestockTracker(
        directory=directory or SubscriberDjangoRepository(),
        dispatcher=dispatcher or NotificationDispatcher(DjangoMailTransport()),
    )
