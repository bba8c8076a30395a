"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

The update use case owns the restock rule: it reads the committed
inventory value under a row lock, applies the change, and once the
transaction commits hands both values to the ``RestockTracker``.
Notification problems are contained by the tracker, so they can never
roll back or fail an update.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.notifications.stock import RestockTracker, build_restock_tracker
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` and, optionally, a
    ``RestockTracker`` via constructor injection.
    """

    def __init__(
        self,
        repository: IProductRepository,
        restock_tracker: Optional[RestockTracker] = None,
    ) -> None:
        self._repo = repository
        self._restock_tracker = restock_tracker or build_restock_tracker()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        product = Product(
            name=dto.name,
            price=dto.price,
            description=dto.description,
            inventory_count=dto.inventory_count,
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Update an existing product with the supplied fields.

        When ``inventory_count`` is supplied, the restock rule runs after
        commit with the pre-update value read from the locked row.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_for_update(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")

        log = logger.bind(product_id=str(id))
        previous_count = product.inventory_count

        for field in ("name", "price", "description", "inventory_count"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated")

        if dto.inventory_count is not None:
            current_count = product.inventory_count
            transaction.on_commit(
                lambda: self._restock_tracker.track(
                    product, previous_count, current_count
                ),
                robust=True,
            )
            log.info(
                "product.inventory_changed",
                before=previous_count,
                after=current_count,
            )
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Product]:
        """Return products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
