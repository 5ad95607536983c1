# app/models/item.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Item(SQLModel):
    """
    Product catalog entry.

    Stock is only changed by checkout (decrement) or by catalog management.
    """

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Catalog id",
    )

    name: str = Field(
        min_length=1,
        max_length=255,
        description="Display name",
    )

    price: Decimal = Field(
        ge=0,
        description="Unit price (exact decimal)",
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    @property
    def out_of_stock(self) -> bool:
        return self.stock <= 0
