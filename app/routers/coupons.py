# app/routers/coupons.py
from fastapi import APIRouter, Depends

from app.core.config import get_settings
from app.database import DataStore, get_store
from app.repositories.coupon_repo import CouponRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.coupon import CouponRead
from app.services.admin_service import AdminService

router = APIRouter(prefix="/coupons", tags=["Coupons"])

settings = get_settings()
service = AdminService(
    OrderRepository(),
    CouponRepository(code_prefix=settings.COUPON_CODE_PREFIX),
)


@router.get("/active", response_model=CouponRead)
def get_active_coupon(store: DataStore = Depends(get_store)):
    """
    The coupon customers can currently use (404 if there is none).
    """
    return service.get_active_coupon(store)
