from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from marketplace.db.session import get_session
from marketplace.models.cart import CartPublic
from marketplace.routers.auth import get_current_user_id
from marketplace.routers.params import MAX_ID, parse_id
from marketplace.routers.products import MessageResponse
from marketplace.services.cart import CartService

router = APIRouter()

MAX_QUANTITY = 2**31 - 1

class CartItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId", gt=0, le=MAX_ID)
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY, strict=True)

class CartResponse(BaseModel):
    cart: CartPublic

def get_cart_service(session: Session = Depends(get_session)) -> CartService:
    return CartService(session)

@router.get("", response_model=CartResponse)
def get_cart(current_user_id: int = Depends(get_current_user_id), service: CartService = Depends(get_cart_service)):
    """Get user's cart, creating an empty one on first access"""
    cart = service.get_or_create_cart(current_user_id)
    return CartResponse(cart=service.to_public(cart))

@router.post("/items", response_model=CartResponse)
def add_to_cart(
    cart_item: CartItemCreate,
    current_user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service)
):
    """Add item to cart"""
    cart = service.add_item(current_user_id, cart_item.product_id, cart_item.quantity)
    return CartResponse(cart=service.to_public(cart))

@router.delete("/items/{product_id}", response_model=CartResponse)
def remove_from_cart(
    product_id: str,
    current_user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service)
):
    """Remove a product's line from the cart"""
    cart = service.remove_item(current_user_id, parse_id(product_id, "Product not found"))
    return CartResponse(cart=service.to_public(cart))

@router.delete("", response_model=MessageResponse)
def clear_cart(
    current_user_id: int = Depends(get_current_user_id),
    service: CartService = Depends(get_cart_service)
):
    """Clear entire cart"""
    service.clear_cart(current_user_id)
    return MessageResponse(message="Cart cleared")
