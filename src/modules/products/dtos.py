"""Product DTOs (Pydantic v2, frozen).

Input DTOs are the contract between the API layer and ``ProductService``.
Negative or out-of-range values are rejected here, so an invalid update
never reaches the database or the restock rule.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.products.models import Product


def _clean_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Name must not be empty.")
    return v


# Column limits: DecimalField(max_digits=10, decimal_places=2) and
# PositiveIntegerField, whose portable maximum is a signed 32-bit int.
MAX_PRICE = Decimal("99999999.99")
MAX_INVENTORY_COUNT = 2147483647


def _check_price(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is None:
        return v
    if v <= 0:
        raise ValueError("Price must be greater than zero.")
    if v > MAX_PRICE:
        raise ValueError(f"Price must not exceed {MAX_PRICE}.")
    if v != v.quantize(Decimal("0.01")):
        raise ValueError("Price must have at most two decimal places.")
    return v


def _check_inventory(v: Optional[int]) -> Optional[int]:
    if v is None:
        return v
    if v < 0:
        raise ValueError("Inventory count cannot be negative.")
    if v > MAX_INVENTORY_COUNT:
        raise ValueError(f"Inventory count must not exceed {MAX_INVENTORY_COUNT}.")
    return v


class _ProductInput(BaseModel):
    """Validation shared by the create and update DTOs."""

    model_config = ConfigDict(frozen=True)

    @field_validator("name", check_fields=False)
    @classmethod
    def name_must_not_be_blank(cls, v):
        return _clean_name(v)

    @field_validator("price", check_fields=False)
    @classmethod
    def price_must_be_positive(cls, v):
        return _check_price(v)

    @field_validator("inventory_count", check_fields=False)
    @classmethod
    def inventory_must_be_non_negative(cls, v):
        return _check_inventory(v)


class CreateProductDTO(_ProductInput):
    name: str
    price: Decimal
    description: str = ""
    inventory_count: int = 0


class UpdateProductDTO(_ProductInput):
    """Partial update: ``None`` means "leave unchanged".

    ``inventory_count=0`` is a real value, not an omission.
    """

    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    inventory_count: Optional[int] = None


class ProductOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str
    price: Decimal
    inventory_count: int
    in_stock: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            inventory_count=product.inventory_count,
            in_stock=product.in_stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
