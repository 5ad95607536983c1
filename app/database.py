# app/database.py
import threading
import uuid
from decimal import Decimal
from functools import lru_cache

from app.models.cart import Cart
from app.models.coupon import Coupon
from app.models.item import Item
from app.models.order import Order

# ---------------------------------------------------------
# In-memory storage
#
# DataStore holds the raw containers plus the locks that guard them.
# Repositories receive it the way they would receive a DB session:
#
#   - items / item_locks : one RLock per item id (stock updates)
#   - carts / cart_locks : per-user cart map, one RLock per user
#   - orders / order_lock: order map + global order counter
#   - active_coupon / coupon_lock: single system-wide coupon + history
#
# Lock order when more than one is held:
#   user cart lock -> item locks (sorted by id) -> coupon_lock -> order_lock
#   item lock -> items_guard (catalog delete)
# ---------------------------------------------------------

SEED_ITEMS: list[tuple[str, str, int]] = [
    ("Laptop", "999.99", 10),
    ("Smartphone", "699.99", 25),
    ("Wireless Headphones", "199.99", 40),
    ("Smart Watch", "299.99", 20),
    ("Design Patterns Book", "49.99", 50),
    ("Clean Code Book", "39.99", 50),
    ("The Pragmatic Programmer", "44.99", 50),
    ("Coffee Maker", "79.99", 15),
    ("Blender", "129.99", 15),
    ("Air Fryer", "89.99", 15),
]


class DataStore:
    def __init__(self) -> None:
        self.items: dict[uuid.UUID, Item] = {}
        self.item_locks: dict[uuid.UUID, threading.RLock] = {}
        self.items_guard = threading.Lock()

        self.carts: dict[str, Cart] = {}
        self.cart_locks: dict[str, threading.RLock] = {}
        self.cart_lock = threading.RLock()

        self.orders: dict[uuid.UUID, Order] = {}
        self.order_counter = 0
        self.order_lock = threading.Lock()

        self.active_coupon: Coupon | None = None
        self.generated_coupons: list[str] = []
        self.coupon_lock = threading.Lock()

    def register_item(self, item: Item) -> Item:
        """Store an item together with its stock lock."""
        with self.items_guard:
            self.items[item.id] = item
            self.item_locks.setdefault(item.id, threading.RLock())
        return item

    def clear_all(self) -> None:
        """
        Drop every entity and reset the order counter (tests only).
        """
        with self.items_guard:
            self.items.clear()
            self.item_locks.clear()
        with self.cart_lock:
            self.carts.clear()
            self.cart_locks.clear()
        with self.order_lock:
            self.orders.clear()
            self.order_counter = 0
        with self.coupon_lock:
            self.active_coupon = None
            self.generated_coupons.clear()


def seed_catalog(store: DataStore) -> list[Item]:
    """
    Load the demo product catalog. Called once on application startup.
    """
    return [
        store.register_item(Item(name=name, price=Decimal(price), stock=stock))
        for name, price, stock in SEED_ITEMS
    ]


@lru_cache
def get_store() -> DataStore:
    """
    FastAPI dependency returning the process-wide DataStore.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(store: DataStore = Depends(get_store)):
            ...
    """
    return DataStore()
