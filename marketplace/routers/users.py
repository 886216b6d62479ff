from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, model_validator
from sqlmodel import Session

from marketplace.db.session import get_session
from marketplace.models.user import UserPublic
from marketplace.routers.auth import USERNAME_PATTERN, UserResponse, get_current_user_id
from marketplace.routers.params import parse_id
from marketplace.services.user import UserService

router = APIRouter()

class UserUpdate(BaseModel):
    username: Optional[str] = Field(default=None, min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    password: Optional[str] = Field(default=None, min_length=8, max_length=100)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("Provide at least one field to update")
        return self

def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)

@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_in: UserUpdate,
    current_user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """
    Update your own profile.
    """
    user = service.update_user(
        parse_id(user_id, "User not found"),
        current_user_id,
        username=user_in.username,
        password=user_in.password,
    )
    return UserResponse(user=UserPublic.model_validate(user))
