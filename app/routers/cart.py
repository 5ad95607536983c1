# app/routers/cart.py
import uuid

from fastapi import APIRouter, Depends, status

from app.database import DataStore, get_store
from app.repositories.cart_repo import CartRepository
from app.repositories.item_repo import ItemRepository
from app.schemas.cart import CartSummary, CartItemCreate, CartItemUpdate
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
item_repo = ItemRepository()
service = CartService(cart_repo, item_repo)


@router.get("/{user_id}", response_model=CartSummary)
def get_cart(
    user_id: str,
    store: DataStore = Depends(get_store),
):
    """
    Get the user's cart summary (an empty cart is created on first access).
    """
    return service.get_cart(store, user_id)


@router.post("/{user_id}/items", response_model=CartSummary)
def add_to_cart(
    user_id: str,
    payload: CartItemCreate,
    store: DataStore = Depends(get_store),
):
    """
    Add an item to the user's cart.

    Returns the updated cart summary.
    """
    return service.add_to_cart(store, user_id, payload.item_id, payload.quantity)


@router.patch("/{user_id}/items/{item_id}", response_model=CartSummary)
def update_cart_item(
    user_id: str,
    item_id: uuid.UUID,
    payload: CartItemUpdate,
    store: DataStore = Depends(get_store),
):
    """
    Update quantity of an item in the cart.

    Returns the updated cart summary.
    """
    return service.update_quantity(
        store=store,
        user_id=user_id,
        item_id=item_id,
        quantity=payload.quantity,
    )


@router.delete("/{user_id}/items/{item_id}", response_model=CartSummary)
def remove_cart_item(
    user_id: str,
    item_id: uuid.UUID,
    store: DataStore = Depends(get_store),
):
    """
    Remove an item from the cart.

    Returns the updated cart summary.
    """
    return service.remove_item(store, user_id, item_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    user_id: str,
    store: DataStore = Depends(get_store),
):
    """
    Clear the entire cart.
    """
    service.clear_cart(store, user_id)
    return None
