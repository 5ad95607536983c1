# app/models/order.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


class OrderLine(SQLModel):
    """
    One line of a completed order, copied from the cart at checkout.
    """

    model_config = ConfigDict(frozen=True)

    item_id: uuid.UUID
    item_name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(gt=0)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Order(SQLModel):
    """
    Completed order.

    Immutable once built. `items` holds frozen copies of the cart lines
    taken at checkout, never the cart's own objects.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
    )

    user_id: str

    items: tuple[OrderLine, ...] = ()

    # What the user pays, after discount
    total_amount: Decimal = Field(
        description="Final amount for this order (after discount)",
    )

    discount_amount: Decimal = Field(
        default=Decimal("0.00"),
        ge=0,
    )

    coupon_code: str | None = None

    # No gateway integration: orders are created as PAID
    payment_status: PaymentStatus = PaymentStatus.PAID

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    @property
    def has_coupon_applied(self) -> bool:
        return bool(self.coupon_code) and self.discount_amount > 0

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.items)
