"""Subscriber and Subscription models.

A ``Subscriber`` is an email address with its own lifecycle.  A
``Subscription`` row links one subscriber to one product and means
"notify this address when the product is back in stock".
"""

from __future__ import annotations

import structlog

from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Subscriber(BaseModel):
    """A contact address interested in restock notifications.

    ``email`` is normalised to lower case on save so the same address
    typed twice maps to one subscriber.
    """

    email = models.EmailField(max_length=254, unique=True)
    products = models.ManyToManyField(
        "products.Product",
        through="Subscription",
        related_name="subscribers",
    )

    class Meta:
        db_table = "subscribers"
        ordering = ["email"]

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.email


class Subscription(BaseModel):
    """Association between a Subscriber and a Product."""

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="subscriptions",
    )
    subscriber = models.ForeignKey(
        Subscriber,
        on_delete=models.CASCADE,
        related_name="subscriptions",
    )

    class Meta:
        db_table = "subscriptions"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "subscriber"],
                name="subscriptions_product_subscriber_uniq",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.subscriber_id} -> {self.product_id}"
