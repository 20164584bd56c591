from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import DatabaseError, UserNotFoundError
from src.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def create(self, name: str, email: str, password_hash: str, preferences: Optional[List[str]] = None) -> User:
        user = User(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            preferences=list(preferences or []),
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"Failed to create user: {e}") from e
        return user

    def update_preferences(self, user_id: str, preferences: List[str]) -> User:
        user = self.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        # Assign a new list so the JSON column is flagged dirty
        user.preferences = list(preferences)
        try:
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"Failed to update preferences: {e}") from e
        return user
