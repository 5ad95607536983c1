# app/services/admin_service.py
import logging

from app.core.exceptions import CouponNotFoundError
from app.database import DataStore
from app.models.coupon import Coupon
from app.repositories.coupon_repo import CouponRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.coupon import CouponList, CouponRead
from app.schemas.stats import AdminStats

logger = logging.getLogger(__name__)


class AdminService:
    """
    Read-side rollups over orders and coupons, plus manual coupon generation.
    """

    def __init__(self, order_repo: OrderRepository, coupon_repo: CouponRepository):
        self.order_repo = order_repo
        self.coupon_repo = coupon_repo

    def get_statistics(self, store: DataStore) -> AdminStats:
        active = self.coupon_repo.get_active(store)
        return AdminStats(
            total_items_purchased=self.order_repo.total_items_purchased(store),
            total_purchase_amount=self.order_repo.total_purchase_amount(store),
            total_discount_amount=self.order_repo.total_discount_amount(store),
            total_orders=len(self.order_repo.list_all(store)),
            orders_with_coupons=self.order_repo.count_orders_with_coupons(store),
            total_coupons_generated=self.coupon_repo.generated_count(store),
            active_coupon=active.code if active is not None else None,
        )

    def list_coupons(self, store: DataStore) -> CouponList:
        codes = self.coupon_repo.list_generated(store)
        return CouponList(coupons=codes, count=len(codes))

    def get_active_coupon(self, store: DataStore) -> CouponRead:
        active = self.coupon_repo.get_active(store)
        if active is None:
            raise CouponNotFoundError()
        return self._to_read(active)

    def generate_coupon(self, store: DataStore) -> CouponRead:
        """
        Generate a coupon numbered after the current global order count.
        Replaces the active coupon, used or not.
        """
        order_count = self.order_repo.get_order_count(store)
        coupon = self.coupon_repo.generate(store, order_count)
        logger.info("Coupon %s generated manually", coupon.code)
        return self._to_read(coupon)

    @staticmethod
    def _to_read(coupon: Coupon) -> CouponRead:
        return CouponRead(
            code=coupon.code,
            used=coupon.used,
            generated_at_order_number=coupon.generated_at_order_number,
            created_at=coupon.created_at,
        )
