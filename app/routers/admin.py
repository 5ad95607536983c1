# app/routers/admin.py
from fastapi import APIRouter, Depends

from app.core.config import get_settings
from app.database import DataStore, get_store
from app.repositories.coupon_repo import CouponRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.coupon import CouponList, CouponRead
from app.schemas.stats import AdminStats
from app.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])

settings = get_settings()
service = AdminService(
    OrderRepository(),
    CouponRepository(code_prefix=settings.COUPON_CODE_PREFIX),
)


@router.get("/stats", response_model=AdminStats)
def get_statistics(store: DataStore = Depends(get_store)):
    """
    Aggregated statistics over all orders and coupons.
    """
    return service.get_statistics(store)


@router.get("/coupons", response_model=CouponList)
def list_coupons(store: DataStore = Depends(get_store)):
    """
    Every coupon code generated so far.
    """
    return service.list_coupons(store)


@router.get("/coupons/active", response_model=CouponRead)
def get_active_coupon(store: DataStore = Depends(get_store)):
    return service.get_active_coupon(store)


@router.post("/coupons/generate", response_model=CouponRead)
def generate_coupon(store: DataStore = Depends(get_store)):
    """
    Generate a new coupon right away, numbered after the current order count.

    The previous coupon expires even if it was never used.
    """
    return service.generate_coupon(store)
