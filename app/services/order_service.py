# app/services/order_service.py
import logging
from decimal import ROUND_HALF_UP, Decimal

from app.core.exceptions import (
    CartNotFoundError,
    CouponInvalidError,
    EmptyCartError,
    InsufficientStockError,
    InvalidArgumentError,
    ItemUnavailableError,
)
from app.database import DataStore
from app.models.cart import CartLine
from app.models.coupon import CouponValidationResult
from app.models.order import Order, OrderLine, PaymentStatus
from app.repositories.cart_repo import CartRepository
from app.repositories.coupon_repo import CouponRepository
from app.repositories.item_repo import ItemRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.order import OrderLineRead, OrderRead

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def calculate_discount(subtotal: Decimal, percentage: int) -> Decimal:
    """
    percentage% of subtotal, rounded half-up to 2 decimal places.
    """
    raw = subtotal * Decimal(percentage) / Decimal(100)
    return raw.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class OrderService:
    """
    Business logic for checkout.

    Responsibilities:
      - Create an order from the user's cart
      - Validate cart lines against the catalog (existence, stock)
      - Apply and consume the active coupon
      - Deduct stock
      - Generate a new coupon on every Nth global order
      - Clear the cart after success

    Locking:
      The user's cart lock is held for the whole checkout, and the stock
      locks of every item in the cart are held from the stock check until
      the stock has been deducted. Two checkouts competing for the last
      unit of an item are therefore serialized: the second one sees the
      reduced stock and fails with InsufficientStockError.

    Nothing is rolled back once the order is saved; with stock locked and
    already validated, the remaining steps cannot fail on valid input.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        item_repo: ItemRepository,
        coupon_repo: CouponRepository,
        nth_order: int = 5,
        discount_percentage: int = 10,
    ):
        if nth_order < 1:
            raise InvalidArgumentError("nth_order must be >= 1")
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.item_repo = item_repo
        self.coupon_repo = coupon_repo
        self.nth_order = nth_order
        self.discount_percentage = discount_percentage

    # -------- User-facing operations --------

    def checkout(
        self,
        store: DataStore,
        user_id: str,
        coupon_code: str | None = None,
    ) -> OrderRead:
        """
        Convert the user's cart into an Order.

        Steps:
          1. Load cart; error if missing or empty.
          2. For each line: item must exist, stock >= quantity.
          3. Subtotal = cart total.
          4. If a coupon code is given: validate + consume, compute discount.
          5. total = subtotal - discount.
          6. Build the Order from copies of the cart lines (status PAID).
          7. Save it, receiving the global order sequence number.
          8. Deduct stock for every line.
          9. Every Nth order generates a new coupon, unless a later order
             already did.
         10. Delete the cart.
        """
        if not user_id or not user_id.strip():
            raise InvalidArgumentError("User ID is required")

        with self.cart_repo.user_lock(store, user_id):
            # 1) Load cart
            cart = self.cart_repo.get_by_user_id(store, user_id)
            if cart is None:
                raise CartNotFoundError(user_id)
            if not cart.items:
                raise EmptyCartError(user_id)

            lines = [line.model_copy(deep=True) for line in cart.items]

            with self.item_repo.lock_items(store, [ln.item_id for ln in lines]):
                # 2) Validate each line vs catalog
                self._validate_lines(store, lines)

                # 3-5) Amounts
                subtotal = cart.total
                discount, applied_code = self._apply_coupon(store, subtotal, coupon_code)
                total_amount = subtotal - discount

                # 6) Build the Order
                order = Order(
                    user_id=user_id,
                    items=tuple(OrderLine(**line.model_dump()) for line in lines),
                    total_amount=total_amount,
                    discount_amount=discount,
                    coupon_code=applied_code,
                    payment_status=PaymentStatus.PAID,
                )

                # 7) Persist
                order_number = self.order_repo.save(store, order)

                # 8) Deduct stock
                for line in lines:
                    self.item_repo.decrease_stock(store, line.item_id, line.quantity)

            # 9) Nth order -> new coupon (replaces any unused one)
            if order_number % self.nth_order == 0:
                coupon = self.coupon_repo.generate(
                    store, order_number, only_if_newer=True
                )
                logger.info(
                    "Order #%d triggered coupon, active is %s", order_number, coupon.code
                )

            # 10) Clear cart
            self.cart_repo.delete(store, user_id)

        logger.info(
            "Checkout complete: order=%s number=%d user=%s total=%s discount=%s",
            order.id,
            order_number,
            user_id,
            order.total_amount,
            order.discount_amount,
        )
        return self._build_order_dto(store, order)

    def get_order_history(self, store: DataStore, user_id: str) -> list[OrderRead]:
        """
        The user's orders, newest first.
        """
        if not user_id or not user_id.strip():
            raise InvalidArgumentError("User ID is required")
        orders = self.order_repo.list_for_user(store, user_id)
        return [self._build_order_dto(store, o) for o in orders]

    # -------- Helpers --------

    def _validate_lines(self, store: DataStore, lines: list[CartLine]) -> None:
        for line in lines:
            item = self.item_repo.get_by_id(store, line.item_id)
            if item is None:
                raise ItemUnavailableError(line.item_id)
            if item.stock < line.quantity:
                logger.info(
                    "Checkout rejected: item %s requested %d, available %d",
                    line.item_id,
                    line.quantity,
                    item.stock,
                )
                raise InsufficientStockError(line.item_id, line.quantity, item.stock)

    def _apply_coupon(
        self,
        store: DataStore,
        subtotal: Decimal,
        coupon_code: str | None,
    ) -> tuple[Decimal, str | None]:
        """
        Returns (discount, applied code). A missing or blank code means no
        coupon; anything else is matched exactly against the active coupon.
        """
        if coupon_code is None or not coupon_code.strip():
            return Decimal("0.00"), None

        result = self.coupon_repo.validate_and_use(store, coupon_code)
        if result is not CouponValidationResult.VALID:
            logger.warning("Coupon %r rejected: %s", coupon_code, result.value)
            raise CouponInvalidError(coupon_code, result)

        logger.info("Coupon %s consumed", coupon_code)
        return calculate_discount(subtotal, self.discount_percentage), coupon_code

    def _build_order_dto(self, store: DataStore, order: Order) -> OrderRead:
        """
        Compose OrderRead, including each item's current stock.
        """
        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            items=[
                OrderLineRead(
                    item_id=line.item_id,
                    item_name=line.item_name,
                    price=line.price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                    available_stock=self.item_repo.current_stock(store, line.item_id),
                )
                for line in order.items
            ],
            total_amount=order.total_amount,
            discount_amount=order.discount_amount,
            coupon_code=order.coupon_code,
            has_coupon_applied=order.has_coupon_applied,
            payment_status=order.payment_status,
            created_at=order.created_at,
        )
