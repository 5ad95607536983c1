# app/schemas/stats.py
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel


class AdminStats(SQLModel):
    """
    Full payload for the admin statistics endpoint.
    """
    model_config = ConfigDict(extra="forbid")

    total_items_purchased: int
    total_purchase_amount: Decimal
    total_discount_amount: Decimal
    total_orders: int
    orders_with_coupons: int
    total_coupons_generated: int
    active_coupon: str | None
