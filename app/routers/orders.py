# app/routers/orders.py
from fastapi import APIRouter, Depends

from app.core.config import get_settings
from app.database import DataStore, get_store
from app.repositories.cart_repo import CartRepository
from app.repositories.coupon_repo import CouponRepository
from app.repositories.item_repo import ItemRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.order import CheckoutRequest, OrderRead
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

settings = get_settings()

service = OrderService(
    OrderRepository(),
    CartRepository(),
    ItemRepository(),
    CouponRepository(code_prefix=settings.COUPON_CODE_PREFIX),
    nth_order=settings.COUPON_NTH_ORDER,
    discount_percentage=settings.COUPON_DISCOUNT_PERCENTAGE,
)


@router.post("/checkout", response_model=OrderRead)
def checkout(
    payload: CheckoutRequest,
    store: DataStore = Depends(get_store),
):
    """
    Create an order from the user's cart.

    - Optional coupon_code must match the active coupon exactly.
    - The cart is cleared on success and left untouched on failure.
    """
    return service.checkout(store, payload.user_id, payload.coupon_code)


@router.get("/{user_id}", response_model=list[OrderRead])
def get_order_history(
    user_id: str,
    store: DataStore = Depends(get_store),
):
    """
    List the user's orders, newest first.
    """
    return service.get_order_history(store, user_id)
