# app/repositories/item_repo.py
import uuid
from contextlib import ExitStack, contextmanager
from typing import Any, Iterable, Iterator

from app.core.exceptions import InsufficientStockError, ItemNotFoundError
from app.database import DataStore
from app.models.item import Item


class ItemRepository:
    """
    Data access layer for the product catalog.

    - Pure storage operations (CRUD + stock updates).
    - Each stock change happens under that item's own lock.
    """

    # ----- Items -----

    def get_by_id(self, store: DataStore, item_id: uuid.UUID) -> Item | None:
        return store.items.get(item_id)

    def exists(self, store: DataStore, item_id: uuid.UUID) -> bool:
        return item_id in store.items

    def list(self, store: DataStore) -> list[Item]:
        with store.items_guard:
            return list(store.items.values())

    def count(self, store: DataStore) -> int:
        return len(store.items)

    def create(self, store: DataStore, item: Item) -> Item:
        return store.register_item(item)

    def update(
        self,
        store: DataStore,
        item_id: uuid.UUID,
        changes: dict[str, Any],
    ) -> Item:
        item = store.items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        with store.item_locks[item_id]:
            for key, value in changes.items():
                setattr(item, key, value)
        return item

    def delete(self, store: DataStore, item_id: uuid.UUID) -> None:
        """
        Remove an item from the catalog.

        Waits for the item's stock lock, so a checkout that has already
        validated this item finishes its stock deduction first.
        """
        with store.items_guard:
            lock = store.item_locks.get(item_id)
        if lock is None:
            return
        with lock:
            with store.items_guard:
                store.items.pop(item_id, None)

    # ----- Stock -----

    def current_stock(self, store: DataStore, item_id: uuid.UUID) -> int:
        item = store.items.get(item_id)
        return item.stock if item is not None else 0

    def decrease_stock(
        self,
        store: DataStore,
        item_id: uuid.UUID,
        quantity: int,
    ) -> int:
        """
        Atomically take `quantity` units out of stock and return what is left.

        Refuses (InsufficientStockError) instead of going below zero.
        """
        item = store.items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        with store.item_locks[item_id]:
            if quantity > item.stock:
                raise InsufficientStockError(item_id, quantity, item.stock)
            item.stock -= quantity
            return item.stock

    @contextmanager
    def lock_items(
        self,
        store: DataStore,
        item_ids: Iterable[uuid.UUID],
    ) -> Iterator[None]:
        """
        Hold the stock locks of several items at once.

        Locks are taken in sorted id order so two callers with overlapping
        items can't deadlock. Unknown ids are skipped.
        """
        with ExitStack() as stack:
            for item_id in sorted(set(item_ids), key=str):
                lock = store.item_locks.get(item_id)
                if lock is not None:
                    stack.enter_context(lock)
            yield
