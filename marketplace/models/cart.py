from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Field, Relationship, SQLModel

from marketplace.models.product import ProductPublic

class CartItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # References
    cart_id: int = Field(foreign_key="cart.id", index=True)
    product_id: int = Field(foreign_key="product.id", index=True)

    # Cart Details
    quantity: int = Field(default=1, ge=1)

    cart: Optional["Cart"] = Relationship(back_populates="items")

class Cart(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Insertion order is the display order
    items: List[CartItem] = Relationship(
        back_populates="cart",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "CartItem.id"},
    )

class CartItemPublic(SQLModel):
    product_id: int
    product: Optional[ProductPublic] = None
    quantity: int

class CartPublic(SQLModel):
    id: int
    user_id: int
    items: List[CartItemPublic] = []
    total: float = 0.0
