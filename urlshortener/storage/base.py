"""
Base storage interfaces for the URL shortener.

Purpose:
    Define small, stable contracts for link and user stores so the service layer
    never depends on where records live.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..domain import Link, User


class BaseLinkStore(ABC):
    """Abstract base class for link stores. Every operation is individually atomic."""

    @abstractmethod  # pragma: no cover
    def save(self, link: Link) -> None:
        """Insert or overwrite by `short_code` (last write wins)."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def save_if_absent(self, link: Link) -> bool:
        """
        Insert only when `short_code` is unused.

        Returns:
            bool: True if inserted, False if the code was already taken.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_by_code(self, code: str) -> Optional[Link]:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_by_owner(self, user_id: UUID) -> List[Link]:
        """Snapshot of the links owned by `user_id`."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def scan_all(self) -> List[Link]:
        """Snapshot of every stored link."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete(self, code: str) -> bool:
        """
        Returns:
            bool: True if a record was removed, False if the code was absent.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def exists(self, code: str) -> bool:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def lock_for(self, code: str):
        """
        Return the mutex guarding read-modify-write sequences on `code`.

        Holding it serializes resolve, delete and eviction for that code.
        """
        raise NotImplementedError


class BaseUserStore(ABC):
    """Abstract base class for user stores."""

    @abstractmethod  # pragma: no cover
    def save(self, user: User) -> None:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_by_id(self, user_id: UUID) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def exists(self, user_id: UUID) -> bool:
        raise NotImplementedError
