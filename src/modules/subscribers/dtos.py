"""Subscriber DTOs for the Service Layer (Pydantic v2, frozen)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class SubscribeDTO(BaseModel):
    """Request to be notified when a product is back in stock.

    The address is stripped and lower-cased before validation, matching
    how ``Subscriber`` stores it.
    """

    model_config = ConfigDict(frozen=True)

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalise_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v
