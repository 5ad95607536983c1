# app/schemas/cart.py
import uuid
from decimal import Decimal

from sqlmodel import SQLModel, Field


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart.
    """

    item_id: uuid.UUID
    quantity: int = Field(gt=0)


class CartItemUpdate(SQLModel):
    """
    Payload for updating quantity of a cart item.
    """

    quantity: int = Field(gt=0)


class CartLineRead(SQLModel):
    """
    Read model for a single cart line, including subtotal.
    """

    item_id: uuid.UUID
    item_name: str
    price: Decimal
    quantity: int
    subtotal: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    user_id: str
    items: list[CartLineRead]
    total_quantity: int
    total_price: Decimal
