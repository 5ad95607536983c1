# app/repositories/order_repo.py
import uuid
from decimal import Decimal

from app.database import DataStore
from app.models.order import Order


class OrderRepository:
    """
    Data access layer for orders and the global order counter.

    NOTE:
      - Orders are never updated or deleted once saved.
      - Aggregates are plain scans over all orders (admin only).
    """

    # ---- Orders ----

    def save(self, store: DataStore, order: Order) -> int:
        """
        Store the order and return its global sequence number (1, 2, 3, ...).
        """
        with store.order_lock:
            store.orders[order.id] = order
            store.order_counter += 1
            return store.order_counter

    def get_by_id(self, store: DataStore, order_id: uuid.UUID) -> Order | None:
        return store.orders.get(order_id)

    def list_all(self, store: DataStore) -> list[Order]:
        with store.order_lock:
            return list(store.orders.values())

    def list_for_user(self, store: DataStore, user_id: str) -> list[Order]:
        """
        Orders of one user, newest first.
        """
        orders = [o for o in self.list_all(store) if o.user_id == user_id]
        # Reverse first so equal timestamps keep newest-saved first
        orders.reverse()
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def get_order_count(self, store: DataStore) -> int:
        with store.order_lock:
            return store.order_counter

    # ---- Aggregates ----

    def total_items_purchased(self, store: DataStore) -> int:
        return sum(o.total_quantity for o in self.list_all(store))

    def total_purchase_amount(self, store: DataStore) -> Decimal:
        return sum((o.total_amount for o in self.list_all(store)), Decimal("0"))

    def total_discount_amount(self, store: DataStore) -> Decimal:
        return sum((o.discount_amount for o in self.list_all(store)), Decimal("0"))

    def count_orders_with_coupons(self, store: DataStore) -> int:
        return sum(1 for o in self.list_all(store) if o.has_coupon_applied)
