from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from marketplace.core.logging import get_logger
from marketplace.core.errors import AuthenticationError, ConflictError
from marketplace.core.security import create_access_token, get_password_hash, verify_password
from marketplace.models.user import User

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(self, session: Session):
        self.session = session

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email.strip().lower())).first()

    def register_user(self, email: str, password: str, username: str) -> User:
        if self.get_user_by_email(email):
            raise ConflictError("Already Registered!")

        user = User(
            email=email.strip().lower(),
            username=username,
            password_hash=get_password_hash(password),
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            self.session.rollback()
            raise ConflictError("Already Registered!")
        self.session.refresh(user)

        logger.info("User registered", user_id=user.id)
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        """Return the user for a valid email/password pair.

        Unknown emails and wrong passwords fail with the same error so the
        response does not reveal which one was wrong.
        """
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id)
