# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_cart_store
from storefront.domain.cart import CartItem
from storefront.domain.schemas import CartItemIn, CartOut, QuantityIn
from storefront.services.cart_service import CartStore

router = APIRouter(prefix="/cart", tags=["cart"])


def to_out(cart: CartStore) -> CartOut:
    return CartOut(
        session_id=cart.session_id,
        items=[vars(i) for i in cart.items],
        total_items=cart.total_items,
        total_price=cart.total_price,
    )


@router.get("", response_model=CartOut)
def get_cart(cart: CartStore = Depends(get_cart_store)):
    return to_out(cart)


@router.post("/items", response_model=CartOut)
def add_item(payload: CartItemIn, cart: CartStore = Depends(get_cart_store)):
    cart.add_to_cart(CartItem(**payload.model_dump()))
    return to_out(cart)


@router.patch("/items/{item_id}", response_model=CartOut)
def update_item(item_id: str, payload: QuantityIn, cart: CartStore = Depends(get_cart_store)):
    cart.update_quantity(item_id, payload.quantity)
    return to_out(cart)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(item_id: str, cart: CartStore = Depends(get_cart_store)):
    cart.remove_from_cart(item_id)
    return to_out(cart)


@router.delete("", response_model=CartOut)
def clear_cart(cart: CartStore = Depends(get_cart_store)):
    cart.clear_cart()
    return to_out(cart)
