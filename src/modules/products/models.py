"""Product model with inventory tracking.

Business rules implemented:
- Price must be greater than zero.
- Inventory count cannot be negative.
- A product is "in stock" while ``inventory_count > 0``; the restock rule
  in ``modules.notifications.stock`` fires on the transition into that state.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Catalog product.

    ``inventory_count`` is a ``PositiveIntegerField`` and is also guarded
    by a CHECK constraint, so a negative value cannot be committed even
    when ``full_clean`` is bypassed.
    """

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    inventory_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="products_name_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(inventory_count__gte=0),
                name="products_inventory_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name:
            self.name = self.name.strip()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})
        if self.inventory_count is not None and self.inventory_count < 0:
            raise ValidationError(
                {"inventory_count": "Inventory count cannot be negative."}
            )

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    @property
    def in_stock(self) -> bool:
        return self.inventory_count > 0

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
                inventory_count=self.inventory_count,
            )

    def __str__(self) -> str:
        return self.name
