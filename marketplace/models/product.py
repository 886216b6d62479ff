from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone

class ProductBase(SQLModel):
    # Basic Info
    title: str = Field(index=True)
    category: str = Field(index=True)
    description: Optional[str] = None

    # Pricing
    price: float

    # Images
    image: Optional[str] = None

class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)

    # Metadata
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class ProductOwner(SQLModel):
    id: int
    username: str

class ProductPublic(ProductBase):
    id: int
    owner_id: int
    owner: Optional[ProductOwner] = None
    created_at: datetime
    updated_at: datetime
