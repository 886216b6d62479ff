from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Field, Relationship, SQLModel

from marketplace.models.product import ProductPublic

class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)
    # Not a foreign key: orders outlive the products they reference
    product_id: int = Field(index=True)
    quantity: int
    price_at_purchase: float

class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    # Sum of price_at_purchase * quantity, fixed at checkout
    total: float

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    items: List[OrderItem] = Relationship(
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "OrderItem.id"}
    )

class OrderItemPublic(SQLModel):
    product_id: int
    product: Optional[ProductPublic] = None
    quantity: int
    price: float

class OrderPublic(SQLModel):
    id: int
    user_id: int
    items: List[OrderItemPublic] = []
    total: float
    created_at: datetime
