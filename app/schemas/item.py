# app/schemas/item.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ItemCreate(SQLModel):
    """
    Payload for adding a product to the catalog.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    price: Decimal = Field(ge=0)
    stock: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ItemUpdate(SQLModel):
    """
    Partial update payload for items.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    price: Decimal | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)

    @field_validator("name", "price", "stock")
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; null is not a value
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ItemRead(SQLModel):
    """
    Item representation for clients.
    """

    id: uuid.UUID
    name: str
    price: Decimal
    stock: int
    out_of_stock: bool
    created_at: datetime
