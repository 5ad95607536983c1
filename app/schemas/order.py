# app/schemas/order.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from app.models.order import PaymentStatus


class CheckoutRequest(SQLModel):
    """
    Payload for checking out a user's cart.

    coupon_code is optional; a blank string means no coupon. Any other
    value is matched exactly (no trimming) against the active coupon.
    """

    model_config = ConfigDict(extra="forbid")

    user_id: str
    coupon_code: str | None = None

    @field_validator("user_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("User ID is required")
        return v


class OrderLineRead(SQLModel):
    """
    Representation of a single order line.

    available_stock is the item's stock as of this response.
    """

    item_id: uuid.UUID
    item_name: str
    price: Decimal
    quantity: int
    subtotal: Decimal
    available_stock: int


class OrderRead(SQLModel):
    """
    Full order view including lines.
    """

    id: uuid.UUID
    user_id: str
    items: list[OrderLineRead]
    total_amount: Decimal
    discount_amount: Decimal
    coupon_code: str | None
    has_coupon_applied: bool
    payment_status: PaymentStatus
    created_at: datetime
