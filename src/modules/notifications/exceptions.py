"""Notification delivery exceptions."""

from __future__ import annotations


class DeliveryError(Exception):
    """A single message could not be handed to the mail transport.

    Carries the recipient so the dispatcher can report which deliveries
    failed without aborting the remaining ones.
    """

    def __init__(self, recipient: str, reason: str) -> None:
        super().__init__(f"Delivery to {recipient} failed: {reason}")
        self.recipient = recipient
        self.reason = reason
