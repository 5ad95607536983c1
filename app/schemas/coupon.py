# app/schemas/coupon.py
from datetime import datetime

from sqlmodel import SQLModel


class CouponRead(SQLModel):
    code: str
    used: bool
    generated_at_order_number: int
    created_at: datetime


class CouponList(SQLModel):
    """
    Every code generated so far, oldest first.
    """

    coupons: list[str]
    count: int
