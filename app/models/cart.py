# app/models/cart.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class CartLine(SQLModel):
    """
    One product inside a cart.

    item_name and price are snapshots taken when the item was added;
    later catalog changes never reach this line.
    """

    item_id: uuid.UUID
    item_name: str
    price: Decimal = Field(
        ge=0,
        description="Price when added to cart",
    )
    quantity: int = Field(
        gt=0,
        description="Must be >= 1",
    )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Cart(SQLModel):
    """
    Shopping cart for a user.
    One cart per user, one line per item.
    """

    user_id: str
    items: list[CartLine] = Field(default_factory=list)

    # Derived; call recalculate_total() after every change to items
    total: Decimal = Decimal("0")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    def find_line(self, item_id: uuid.UUID) -> CartLine | None:
        for line in self.items:
            if line.item_id == item_id:
                return line
        return None

    def recalculate_total(self) -> Decimal:
        self.total = sum((line.subtotal for line in self.items), Decimal("0"))
        return self.total

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.items)
