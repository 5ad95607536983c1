# app/core/exceptions.py
"""Domain errors raised by services, mapped to HTTP responses in app.main."""

import uuid

from app.models.coupon import CouponValidationResult


class StoreError(Exception):
    """Base exception for all storefront errors."""

    pass


class InvalidArgumentError(StoreError):
    """Raised for non-positive quantities or blank required identifiers."""

    def __init__(self, message: str):
        super().__init__(message)


class ItemNotFoundError(StoreError):
    """Raised when a catalog item id doesn't exist."""

    def __init__(self, item_id: uuid.UUID):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class CartNotFoundError(StoreError):
    """Raised when the user has no cart."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Cart not found for user: {user_id}")


class CartItemNotFoundError(StoreError):
    """Raised when a cart line for the item doesn't exist."""

    def __init__(self, item_id: uuid.UUID):
        self.item_id = item_id
        super().__init__(f"Item not found in cart: {item_id}")


class EmptyCartError(StoreError):
    """Raised when checking out a cart without lines."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Cannot checkout with empty cart")


class ItemUnavailableError(StoreError):
    """Raised when a cart line references an item no longer in the catalog."""

    def __init__(self, item_id: uuid.UUID):
        self.item_id = item_id
        super().__init__(f"Item no longer available: {item_id}")


class InsufficientStockError(StoreError):
    """Raised when the requested quantity exceeds current stock."""

    def __init__(self, item_id: uuid.UUID, requested: int, available: int):
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for item: {item_id}. "
            f"Requested: {requested}, Available: {available}"
        )


COUPON_MESSAGES: dict[CouponValidationResult, str] = {
    CouponValidationResult.NO_ACTIVE_COUPON: "No active coupon available.",
    CouponValidationResult.INVALID_CODE: (
        "Invalid coupon code: {code}. Please check the active coupon code."
    ),
    CouponValidationResult.ALREADY_USED: "Coupon code already used: {code}",
}


class CouponInvalidError(StoreError):
    """Raised when a supplied coupon code is rejected at checkout."""

    def __init__(self, code: str, reason: CouponValidationResult):
        self.code = code
        self.reason = reason
        template = COUPON_MESSAGES.get(reason, "Invalid coupon code: {code}")
        super().__init__(template.format(code=code))


class CouponNotFoundError(StoreError):
    """Raised when no coupon is currently active."""

    def __init__(self):
        super().__init__("No active coupon available.")
