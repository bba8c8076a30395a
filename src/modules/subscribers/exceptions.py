"""Subscriber domain exceptions."""

from __future__ import annotations


class SubscriptionNotFound(Exception):
    """The address is not subscribed to the product."""


class SubscriberLookupError(Exception):
    """The subscriber directory could not be read.

    Raised by the repository when the underlying store fails.  The restock
    rule catches it and skips notification without failing the update.
    """
