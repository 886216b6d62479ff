from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlmodel import Session

from marketplace.core.errors import AuthenticationError, NotFoundError
from marketplace.core.security import decode_access_token
from marketplace.db.session import get_session
from marketplace.models.user import UserPublic
from marketplace.services.auth import AuthService
from marketplace.services.user import UserService

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)

USERNAME_PATTERN = r"^[a-zA-Z0-9_.-]+$"


def lowercase_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    username: str = Field(min_length=3, max_length=30, pattern=USERNAME_PATTERN)

    normalize_email = field_validator("email", mode="before")(lowercase_email)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    normalize_email = field_validator("email", mode="before")(lowercase_email)

class AuthResponse(BaseModel):
    token: str
    user: UserPublic

class UserResponse(BaseModel):
    user: UserPublic


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)

def get_current_user_id(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> int:
    """Resolve the bearer token to the id of the user it was issued for."""
    if credentials is None:
        raise AuthenticationError("Authentication required")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationError("Invalid or expired token")
    return user_id


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    user = service.register_user(user_in.email, user_in.password, user_in.username)
    return AuthResponse(token=service.issue_token(user), user=UserPublic.model_validate(user))

@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, service: AuthService = Depends(get_auth_service)):
    user = service.authenticate_user(credentials.email, credentials.password)
    return AuthResponse(token=service.issue_token(user), user=UserPublic.model_validate(user))

@router.get("/me", response_model=UserResponse)
def read_user_me(user_id: int = Depends(get_current_user_id), session: Session = Depends(get_session)):
    """
    Get current user.
    """
    user = UserService(session).get_user_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return UserResponse(user=UserPublic.model_validate(user))
