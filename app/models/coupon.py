# app/models/coupon.py
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class CouponValidationResult(str, Enum):
    """Outcome of checking a code against the active coupon."""

    VALID = "VALID"
    NO_ACTIVE_COUPON = "NO_ACTIVE_COUPON"
    INVALID_CODE = "INVALID_CODE"
    ALREADY_USED = "ALREADY_USED"


class Coupon(SQLModel):
    """
    System-wide discount coupon.

    At most one coupon is active at a time. `used` only ever goes
    False -> True.
    """

    code: str = Field(
        description="e.g. SAVE10-005",
    )

    used: bool = False

    generated_at_order_number: int = Field(
        ge=0,
        description="Global order count that triggered this coupon",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
