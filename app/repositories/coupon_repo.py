# app/repositories/coupon_repo.py
from app.database import DataStore
from app.models.coupon import Coupon, CouponValidationResult


class CouponRepository:
    """
    Data access layer for the single system-wide coupon.

    Responsibilities:
      - generate a new coupon, replacing (expiring) the active one
      - validate a code and mark it used in one step
      - keep the history of generated codes for admin reporting

    Every method that reads or changes the active coupon runs under
    store.coupon_lock, so check-then-use can't interleave with generate.
    Coupons handed out are copies; the stored one only changes in here.
    """

    def __init__(self, code_prefix: str = "SAVE10"):
        self.code_prefix = code_prefix

    def make_code(self, order_number: int) -> str:
        """SAVE10-005 style: prefix + order number zero-padded to 3 digits."""
        return f"{self.code_prefix}-{order_number:03d}"

    def get_active(self, store: DataStore) -> Coupon | None:
        with store.coupon_lock:
            if store.active_coupon is None:
                return None
            return store.active_coupon.model_copy()

    def generate(
        self,
        store: DataStore,
        order_number: int,
        only_if_newer: bool = False,
    ) -> Coupon:
        """
        Make a fresh coupon for `order_number` the active one.

        With only_if_newer, a coupon for an older order number than the
        active one is not generated and the active coupon is returned.
        """
        coupon = Coupon(
            code=self.make_code(order_number),
            used=False,
            generated_at_order_number=order_number,
        )
        with store.coupon_lock:
            active = store.active_coupon
            if (
                only_if_newer
                and active is not None
                and active.generated_at_order_number > order_number
            ):
                return active.model_copy()
            # Any previous coupon, used or not, expires here
            store.active_coupon = coupon
            store.generated_coupons.append(coupon.code)
            return coupon.model_copy()

    def validate_and_use(self, store: DataStore, code: str) -> CouponValidationResult:
        """
        Check `code` against the active coupon and consume it if valid.

        Exact match only: no trimming, no case folding.
        """
        with store.coupon_lock:
            active = store.active_coupon
            if active is None:
                return CouponValidationResult.NO_ACTIVE_COUPON
            if active.code != code:
                return CouponValidationResult.INVALID_CODE
            if active.used:
                return CouponValidationResult.ALREADY_USED
            active.used = True
            return CouponValidationResult.VALID

    def is_valid(self, store: DataStore, code: str) -> bool:
        with store.coupon_lock:
            active = store.active_coupon
            return active is not None and active.code == code and not active.used

    def list_generated(self, store: DataStore) -> list[str]:
        with store.coupon_lock:
            return list(store.generated_coupons)

    def generated_count(self, store: DataStore) -> int:
        with store.coupon_lock:
            return len(store.generated_coupons)
