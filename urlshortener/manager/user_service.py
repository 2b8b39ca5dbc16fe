"""
UserService: mints and looks up anonymous session identities.
"""

from uuid import UUID

from ..domain import User
from ..errors import NotFound
from ..storage import BaseUserStore


class UserService:
    def __init__(self, store: BaseUserStore):
        self.store = store

    def create_user(self) -> User:
        """Create, store and return a user with a fresh random id."""
        user = User.create()
        self.store.save(user)
        return user

    def get_user(self, user_id: UUID) -> User:
        """
        Raises:
            NotFound: If no user has this id.
        """
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFound(str(user_id), f"User not found: {user_id}")
        return user

    def user_exists(self, user_id: UUID) -> bool:
        return self.store.exists(user_id)
