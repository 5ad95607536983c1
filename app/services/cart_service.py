# app/services/cart_service.py
import uuid

from app.core.exceptions import (
    CartItemNotFoundError,
    CartNotFoundError,
    InsufficientStockError,
    InvalidArgumentError,
    ItemNotFoundError,
)
from app.database import DataStore
from app.models.cart import Cart, CartLine
from app.models.item import Item
from app.repositories.cart_repo import CartRepository
from app.repositories.item_repo import ItemRepository
from app.schemas.cart import CartLineRead, CartSummary


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate item existence and positive quantities
      - enforce quantity <= current stock when adding/updating
      - snapshot item name and price into the cart line
      - recompute the cart total after every change
    """

    def __init__(self, cart_repo: CartRepository, item_repo: ItemRepository):
        self.cart_repo = cart_repo
        self.item_repo = item_repo

    # ---- internal helpers ----

    @staticmethod
    def _check_user(user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise InvalidArgumentError("User ID is required")

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity <= 0:
            raise InvalidArgumentError("Quantity must be positive")

    def _get_item(self, store: DataStore, item_id: uuid.UUID) -> Item:
        item = self.item_repo.get_by_id(store, item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def _get_cart(self, store: DataStore, user_id: str) -> Cart:
        cart = self.cart_repo.get_by_user_id(store, user_id)
        if cart is None:
            raise CartNotFoundError(user_id)
        return cart

    @staticmethod
    def _build_summary(cart: Cart) -> CartSummary:
        return CartSummary(
            user_id=cart.user_id,
            items=[
                CartLineRead(
                    item_id=line.item_id,
                    item_name=line.item_name,
                    price=line.price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in cart.items
            ],
            total_quantity=cart.total_quantity,
            total_price=cart.total,
        )

    # ---- public operations ----

    def get_cart(self, store: DataStore, user_id: str) -> CartSummary:
        """
        Return the user's cart, creating an empty one on first access.
        """
        self._check_user(user_id)
        return self._build_summary(self.cart_repo.get_or_create(store, user_id))

    def add_to_cart(
        self,
        store: DataStore,
        user_id: str,
        item_id: uuid.UUID,
        quantity: int,
    ) -> CartSummary:
        """
        Add an item to the user's cart.

        Rules:
          - item must exist in the catalog
          - quantity + existing quantity <= current stock
          - name and price are copied from the catalog at this moment
        """
        self._check_user(user_id)
        self._check_quantity(quantity)
        item = self._get_item(store, item_id)

        with self.cart_repo.user_lock(store, user_id):
            cart = self.cart_repo.get_or_create(store, user_id)
            existing = cart.find_line(item_id)
            new_qty = quantity + (existing.quantity if existing else 0)
            if new_qty > item.stock:
                raise InsufficientStockError(item_id, new_qty, item.stock)

            if existing:
                existing.quantity = new_qty
            else:
                cart.items.append(
                    CartLine(
                        item_id=item.id,
                        item_name=item.name,
                        price=item.price,
                        quantity=quantity,
                    )
                )

            cart.recalculate_total()
            self.cart_repo.save(store, cart)
            return self._build_summary(cart)

    def update_quantity(
        self,
        store: DataStore,
        user_id: str,
        item_id: uuid.UUID,
        quantity: int,
    ) -> CartSummary:
        """
        Set the quantity of a line already in the cart.
        """
        self._check_user(user_id)
        self._check_quantity(quantity)

        with self.cart_repo.user_lock(store, user_id):
            cart = self._get_cart(store, user_id)
            line = cart.find_line(item_id)
            if line is None:
                raise CartItemNotFoundError(item_id)

            available = self.item_repo.current_stock(store, item_id)
            if quantity > available:
                raise InsufficientStockError(item_id, quantity, available)

            line.quantity = quantity
            cart.recalculate_total()
            self.cart_repo.save(store, cart)
            return self._build_summary(cart)

    def remove_item(
        self,
        store: DataStore,
        user_id: str,
        item_id: uuid.UUID,
    ) -> CartSummary:
        """
        Remove an item's line from the cart and return updated summary.
        """
        self._check_user(user_id)

        with self.cart_repo.user_lock(store, user_id):
            cart = self._get_cart(store, user_id)
            line = cart.find_line(item_id)
            if line is None:
                raise CartItemNotFoundError(item_id)

            cart.items.remove(line)
            cart.recalculate_total()
            self.cart_repo.save(store, cart)
            return self._build_summary(cart)

    def clear_cart(self, store: DataStore, user_id: str) -> None:
        """
        Delete the whole cart; the next access starts a fresh one.
        """
        self._check_user(user_id)
        with self.cart_repo.user_lock(store, user_id):
            self.cart_repo.delete(store, user_id)
