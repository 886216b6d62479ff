from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from marketplace.core.logging import get_logger
from marketplace.core.errors import NotFoundError
from marketplace.models.cart import Cart, CartItem, CartItemPublic, CartPublic
from marketplace.models.product import Product
from marketplace.services.product import ProductService

logger = get_logger(__name__)


class CartService:
    def __init__(self, session: Session):
        self.session = session

    def to_public(self, cart: Cart) -> CartPublic:
        """Shape a cart for output with products populated and a total at current prices."""
        products = ProductService(self.session)
        items = []
        total = 0.0
        for item in cart.items:
            product = self.session.get(Product, item.product_id)
            items.append(CartItemPublic(
                product_id=item.product_id,
                product=products.to_public(product) if product else None,
                quantity=item.quantity,
            ))
            if product:
                total += product.price * item.quantity
        return CartPublic(id=cart.id, user_id=cart.user_id, items=items, total=total)

    def get_cart(self, user_id: int) -> Optional[Cart]:
        return self.session.exec(select(Cart).where(Cart.user_id == user_id)).first()

    def get_or_create_cart(self, user_id: int) -> Cart:
        cart = self.get_cart(user_id)
        if cart:
            return cart

        cart = Cart(user_id=user_id)
        self.session.add(cart)
        try:
            self.session.commit()
        except IntegrityError:
            # Either another request created it first or the user is gone
            self.session.rollback()
            cart = self.get_cart(user_id)
            if not cart:
                raise NotFoundError("User not found")
            return cart
        self.session.refresh(cart)
        return cart

    def add_item(self, user_id: int, product_id: int, quantity: int = 1) -> Cart:
        """Add a product to the cart, merging with an existing line for it."""
        if not self.session.get(Product, product_id):
            raise NotFoundError("Product not found")

        cart = self.get_or_create_cart(user_id)
        existing_item = next((item for item in cart.items if item.product_id == product_id), None)
        if existing_item:
            existing_item.quantity += quantity
            self.session.add(existing_item)
        else:
            cart.items.append(CartItem(product_id=product_id, quantity=quantity))

        cart.updated_at = datetime.now(timezone.utc)
        self.session.add(cart)
        self.session.commit()
        self.session.refresh(cart)
        return cart

    def remove_item(self, user_id: int, product_id: int) -> Cart:
        cart = self.get_cart(user_id)
        if not cart:
            raise NotFoundError("Cart not found")

        remaining = [item for item in cart.items if item.product_id != product_id]
        if len(remaining) != len(cart.items):
            cart.items = remaining
            cart.updated_at = datetime.now(timezone.utc)
            self.session.add(cart)
            self.session.commit()
            self.session.refresh(cart)
        return cart

    def clear_cart(self, user_id: int) -> None:
        cart = self.get_cart(user_id)
        if cart:
            cart.items = []
            cart.updated_at = datetime.now(timezone.utc)
            self.session.add(cart)
            self.session.commit()
