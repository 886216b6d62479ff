from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

class UserBase(SQLModel):
    email: str = Field(unique=True, index=True)  # stored lowercased
    username: str = Field(max_length=30)

class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class UserPublic(UserBase):
    """Outward representation of a user; never carries the password hash."""
    id: int
    created_at: datetime
    updated_at: datetime
