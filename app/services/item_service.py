# app/services/item_service.py
import logging
import uuid

from app.core.exceptions import ItemNotFoundError
from app.database import DataStore
from app.models.item import Item
from app.repositories.item_repo import ItemRepository
from app.schemas.item import ItemCreate, ItemRead, ItemUpdate

logger = logging.getLogger(__name__)


class ItemService:
    """
    Business logic for the product catalog.

    Price changes only affect future cart additions; existing cart lines
    keep the price they were added with.
    """

    def __init__(self, repo: ItemRepository):
        self.repo = repo

    @staticmethod
    def _to_read(item: Item) -> ItemRead:
        return ItemRead(
            id=item.id,
            name=item.name,
            price=item.price,
            stock=item.stock,
            out_of_stock=item.out_of_stock,
            created_at=item.created_at,
        )

    def list_items(self, store: DataStore) -> list[ItemRead]:
        return [self._to_read(item) for item in self.repo.list(store)]

    def get_item(self, store: DataStore, item_id: uuid.UUID) -> ItemRead:
        item = self.repo.get_by_id(store, item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return self._to_read(item)

    def create_item(self, store: DataStore, payload: ItemCreate) -> ItemRead:
        item = self.repo.create(
            store,
            Item(name=payload.name, price=payload.price, stock=payload.stock),
        )
        logger.info("Catalog item created: %s (%s)", item.name, item.id)
        return self._to_read(item)

    def update_item(
        self,
        store: DataStore,
        item_id: uuid.UUID,
        payload: ItemUpdate,
    ) -> ItemRead:
        changes = payload.model_dump(exclude_unset=True)
        item = self.repo.update(store, item_id, changes)
        return self._to_read(item)

    def delete_item(self, store: DataStore, item_id: uuid.UUID) -> None:
        if not self.repo.exists(store, item_id):
            raise ItemNotFoundError(item_id)
        self.repo.delete(store, item_id)
        logger.info("Catalog item removed: %s", item_id)
