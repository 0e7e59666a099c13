"""User domain service."""

from typing import Optional
from tabkeeper.database.base import Database
from tabkeeper.domain.entities import User as UserEntity
from tabkeeper.domain.errors import ConflictError, ValidationError


class UserService:
    """Service for managing staff users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, username: str, name: str) -> int:
        """Create a user.

        Usernames are stored lower-cased and trimmed.

        Raises:
            ValidationError: If username or name is empty
            ConflictError: If username is taken
        """
        username = username.lower().strip()
        name = name.strip()
        if not username or not name:
            raise ValidationError("Username and name are required")
        if self.db.get_user_by_username(username) is not None:
            raise ConflictError(f"User with username '{username}' already exists")
        return self.db.create_user(username=username, name=name)

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        return self.db.get_user(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserEntity]:
        return self.db.get_user_by_username(username.lower().strip())

    def list_users(self) -> list[UserEntity]:
        return self.db.list_users()
