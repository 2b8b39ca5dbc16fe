"""
User record: an anonymous, identifier-only session identity.
"""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID

    @classmethod
    def create(cls) -> "User":
        """Mint a user with a fresh random 128-bit identity."""
        return cls(id=uuid4())
