# app/repositories/cart_repo.py
import threading

from app.database import DataStore
from app.models.cart import Cart


class CartRepository:

    # Get cart for a user
    def get_by_user_id(self, store: DataStore, user_id: str) -> Cart | None:
        with store.cart_lock:
            return store.carts.get(user_id)

    def get_or_create(self, store: DataStore, user_id: str) -> Cart:
        with store.cart_lock:
            cart = store.carts.get(user_id)
            if cart is None:
                cart = Cart(user_id=user_id)
                store.carts[user_id] = cart
            return cart

    def user_lock(self, store: DataStore, user_id: str) -> threading.RLock:
        """
        Lock serializing read-modify-save sequences on one user's cart.
        Different users never share a lock.
        """
        with store.cart_lock:
            return store.cart_locks.setdefault(user_id, threading.RLock())

    # CRUD
    def save(self, store: DataStore, cart: Cart) -> Cart:
        with store.cart_lock:
            store.carts[cart.user_id] = cart
        return cart

    def delete(self, store: DataStore, user_id: str) -> None:
        with store.cart_lock:
            store.carts.pop(user_id, None)

    def exists(self, store: DataStore, user_id: str) -> bool:
        with store.cart_lock:
            return user_id in store.carts

    def count(self, store: DataStore) -> int:
        with store.cart_lock:
            return len(store.carts)
