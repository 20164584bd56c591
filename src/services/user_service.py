from typing import List, Optional

import structlog

from ..core.security import hash_password, verify_password, create_access_token
from ..exceptions import UserAlreadyExistsError, InvalidCredentialsError
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def signup(self, name: str, email: str, password: str, preferences: Optional[List[str]] = None) -> User:
        if self.user_repo.get_by_email(email):
            logger.warning("signup_email_taken", email=email)
            raise UserAlreadyExistsError(email)

        user = self.user_repo.create(
            name=name,
            email=email,
            password_hash=hash_password(password),
            preferences=preferences,
        )
        logger.info("user_created", user_id=user.user_id, email=user.email)
        return user

    def login(self, email: str, password: str) -> str:
        """Check credentials and return a fresh access token."""
        user = self.user_repo.get_by_email(email)
        if not user:
            logger.warning("login_unknown_email", email=email)
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.warning("login_invalid_password", email=email)
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=user.user_id, email=user.email)
        return create_access_token(user.user_id)

    def update_preferences(self, user_id: str, preferences: List[str]) -> User:
        user = self.user_repo.update_preferences(user_id, preferences)
        logger.info("preferences_updated", user_id=user_id, preferences=user.preferences)
        return user
