# Import all models to register them with SQLModel
from marketplace.models.user import User, UserPublic
from marketplace.models.product import Product, ProductOwner, ProductPublic
from marketplace.models.cart import Cart, CartItem, CartPublic, CartItemPublic
from marketplace.models.order import Order, OrderItem, OrderPublic, OrderItemPublic

__all__ = [
    "User",
    "UserPublic",
    "Product",
    "ProductOwner",
    "ProductPublic",
    "Cart",
    "CartItem",
    "CartPublic",
    "CartItemPublic",
    "Order",
    "OrderItem",
    "OrderPublic",
    "OrderItemPublic",
]
