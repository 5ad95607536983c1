"""Pytest fixtures for storefront tests."""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import StoreError
from app.database import DataStore, get_store
from app.models.item import Item
from app.repositories.cart_repo import CartRepository
from app.repositories.coupon_repo import CouponRepository
from app.repositories.item_repo import ItemRepository
from app.repositories.order_repo import OrderRepository
from app.services.admin_service import AdminService
from app.services.cart_service import CartService
from app.services.order_service import OrderService


@pytest.fixture
def store():
    """A fresh, empty in-memory store."""
    return DataStore()


@pytest.fixture
def item_repo():
    return ItemRepository()


@pytest.fixture
def cart_repo():
    return CartRepository()


@pytest.fixture
def order_repo():
    return OrderRepository()


@pytest.fixture
def coupon_repo():
    return CouponRepository(code_prefix="SAVE10")


@pytest.fixture
def cart_service(cart_repo, item_repo):
    return CartService(cart_repo, item_repo)


@pytest.fixture
def order_service(order_repo, cart_repo, item_repo, coupon_repo):
    return OrderService(
        order_repo,
        cart_repo,
        item_repo,
        coupon_repo,
        nth_order=5,
        discount_percentage=10,
    )


@pytest.fixture
def admin_service(order_repo, coupon_repo):
    return AdminService(order_repo, coupon_repo)


@pytest.fixture
def make_item(store, item_repo):
    """Factory adding an item to the catalog."""

    def _make(name="Laptop", price="999.99", stock=10):
        return item_repo.create(store, Item(name=name, price=Decimal(price), stock=stock))

    return _make


@pytest.fixture
def place_order(store, cart_service, order_service):
    """Factory filling a user's cart with one item and checking out."""

    def _place(user_id, item, quantity=1, coupon_code=None):
        cart_service.add_to_cart(store, user_id, item.id, quantity)
        return order_service.checkout(store, user_id, coupon_code)

    return _place


@pytest.fixture
def run_concurrently():
    """
    Run callables on separate threads, released together by a barrier.

    Returns each callable's result, or the StoreError it raised.
    """

    def _run(fns):
        barrier = threading.Barrier(len(fns))

        def call(fn):
            barrier.wait()
            try:
                return fn()
            except StoreError as exc:
                return exc

        with ThreadPoolExecutor(max_workers=len(fns)) as pool:
            futures = [pool.submit(call, fn) for fn in fns]
            return [f.result() for f in futures]

    return _run


@pytest.fixture
def client(store):
    """HTTP client wired to the per-test store."""
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
