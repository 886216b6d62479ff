from datetime import datetime, timezone
from typing import List

from sqlmodel import Session, select

from marketplace.core.logging import get_logger
from marketplace.core.errors import NotFoundError, ValidationError
from marketplace.core.security import ensure_owner
from marketplace.models.order import Order, OrderItem, OrderItemPublic, OrderPublic
from marketplace.models.product import Product
from marketplace.services.cart import CartService
from marketplace.services.product import ProductService

logger = get_logger(__name__)


class OrderService:
    def __init__(self, session: Session):
        self.session = session

    def to_public(self, order: Order) -> OrderPublic:
        products = ProductService(self.session)
        items = []
        for item in order.items:
            product = self.session.get(Product, item.product_id)
            items.append(OrderItemPublic(
                product_id=item.product_id,
                product=products.to_public(product) if product else None,
                quantity=item.quantity,
                price=item.price_at_purchase,
            ))
        return OrderPublic(
            id=order.id,
            user_id=order.user_id,
            items=items,
            total=order.total,
            created_at=order.created_at,
        )

    def checkout(self, user_id: int) -> Order:
        """Turn the user's cart into an order priced at current product prices.

        The order is written and the cart emptied in a single commit. Nothing
        is written when the cart is empty or missing.
        """
        cart = CartService(self.session).get_cart(user_id)
        if not cart or not cart.items:
            raise ValidationError("Cart is empty")

        # Calculate total from current product prices
        total = 0.0
        order_items = []
        for item in cart.items:
            product = self.session.get(Product, item.product_id)
            if not product:
                raise NotFoundError(f"Product {item.product_id} not found")

            total += product.price * item.quantity
            order_items.append(OrderItem(
                product_id=product.id,
                quantity=item.quantity,
                price_at_purchase=product.price,
            ))

        order = Order(user_id=user_id, total=total, items=order_items)
        self.session.add(order)

        cart.items = []
        cart.updated_at = datetime.now(timezone.utc)
        self.session.add(cart)

        self.session.commit()
        self.session.refresh(order)

        logger.info("Order placed", order_id=order.id, user_id=user_id, total=total, item_count=len(order_items))
        return order

    def get_user_orders(self, user_id: int) -> List[Order]:
        return self.session.exec(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()

    def get_order(self, order_id: int, user_id: int) -> Order:
        order = self.session.get(Order, order_id)
        if not order:
            raise NotFoundError("Order not found")
        ensure_owner(order.user_id, user_id)
        return order
