# app/routers/items.py
import uuid

from fastapi import APIRouter, Depends, status

from app.database import DataStore, get_store
from app.repositories.item_repo import ItemRepository
from app.schemas.item import ItemCreate, ItemRead, ItemUpdate
from app.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["Items"])

repo = ItemRepository()
service = ItemService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[ItemRead])
def list_items(store: DataStore = Depends(get_store)):
    """
    List the whole catalog.
    """
    return service.list_items(store)


@router.get("/{item_id}", response_model=ItemRead)
def get_item(
    item_id: uuid.UUID,
    store: DataStore = Depends(get_store),
):
    """
    Get a single item by id.
    """
    return service.get_item(store, item_id)


# -------- Catalog management --------


@router.post(
    "",
    response_model=ItemRead,
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    payload: ItemCreate,
    store: DataStore = Depends(get_store),
):
    """
    Add a new item to the catalog.
    """
    return service.create_item(store, payload)


@router.patch("/{item_id}", response_model=ItemRead)
def update_item(
    item_id: uuid.UUID,
    payload: ItemUpdate,
    store: DataStore = Depends(get_store),
):
    """
    Update name, price or stock of an item.

    Carts keep the price their lines were added with.
    """
    return service.update_item(store, item_id, payload)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: uuid.UUID,
    store: DataStore = Depends(get_store),
):
    """
    Remove an item from the catalog.
    """
    service.delete_item(store, item_id)
    return None
