"""Restock notification dispatcher.

Turns one restock event into one email per subscriber.  Deliveries are
attempted sequentially and independently: a transport failure for one
address is recorded and the loop moves on to the next.  Failures are
reported through the logger and never raised to the caller, because
the inventory update that triggered the dispatch has already committed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List
from uuid import UUID

import structlog
from django.template.loader import render_to_string

from modules.notifications.exceptions import DeliveryError

if TYPE_CHECKING:
    from modules.notifications.transport import IMailTransport
    from modules.products.models import Product
    from modules.subscribers.models import Subscriber

logger = structlog.get_logger(__name__)

IN_STOCK_SUBJECT = "In stock"
IN_STOCK_TEMPLATE = "notifications/in_stock.txt"


@dataclass(frozen=True)
class Notification:
    """One message to one subscriber.  Built per dispatch, never stored."""

    recipient: str
    product_id: UUID
    subject: str
    body: str


class NotificationDispatcher:
    """Builds and sends "back in stock" notifications."""

    def __init__(self, transport: IMailTransport) -> None:
        self._transport = transport

    def build(self, product: Product, subscriber: Subscriber) -> Notification:
        body = render_to_string(
            IN_STOCK_TEMPLATE,
            {"product": product, "subscriber": subscriber},
        )
        return Notification(
            recipient=subscriber.email,
            product_id=product.id,
            subject=IN_STOCK_SUBJECT,
            body=body,
        )

    def dispatch(self, product: Product, subscribers: Iterable[Subscriber]) -> int:
        """Send one notification per subscriber.

        Returns the number of messages attempted, failed ones included.
        An empty ``subscribers`` is a no-op returning ``0``.
        """
        log = logger.bind(product_id=str(product.id))
        attempted = 0
        failures: List[DeliveryError] = []

        for subscriber in subscribers:
            notification = self.build(product, subscriber)
            attempted += 1
            try:
                self._transport.send(
                    notification.recipient,
                    notification.subject,
                    notification.body,
                )
            except DeliveryError as exc:
                failures.append(exc)
                log.warning(
                    "restock.delivery_failed",
                    recipient=exc.recipient,
                    reason=exc.reason,
                )
            except Exception as exc:
                # Any other transport error is confined to its recipient.
                failures.append(
                    DeliveryError(notification.recipient, f"{type(exc).__name__}: {exc}")
                )
                log.exception(
                    "restock.delivery_failed",
                    recipient=notification.recipient,
                    reason=type(exc).__name__,
                )

        if failures:
            log.error(
                "restock.dispatch_incomplete",
                attempted=attempted,
                failed=len(failures),
                failed_recipients=", ".join(f.recipient for f in failures),
            )
        log.info(
            "restock.dispatched",
            attempted=attempted,
            delivered=attempted - len(failures),
        )
        return attempted
