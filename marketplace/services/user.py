from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Session
from marketplace.core.errors import NotFoundError
from marketplace.core.security import ensure_owner, get_password_hash
from marketplace.models.user import User

class UserService:
    def __init__(self, session: Session):
        self.session = session

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def update_user(self, user_id: int, requester_id: int, username: str = None, password: str = None) -> User:
        ensure_owner(user_id, requester_id, "You can only update your own profile")

        user = self.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        if username is not None:
            user.username = username
        if password is not None:
            user.password_hash = get_password_hash(password)
        user.updated_at = datetime.now(timezone.utc)

        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
