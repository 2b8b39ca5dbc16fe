"""
In-memory, thread-safe stores for the URL shortener.

Responsibilities:
    - Map short codes to Link records and user ids to User records
    - Provide snapshot scans for listing and eviction
    - Hand out per-code locks so the service can make resolve/delete/evict atomic

Design:
    - A single map lock makes each store operation atomic on its own.
    - A fixed array of striped locks (code -> stripe) serializes multi-step
      sequences on one code without a lock object per link.
    - The map lock is never held while waiting for a stripe, so the two
      levels cannot deadlock.
    - Nothing is persisted; the store lives and dies with the process.
"""

import threading
from typing import Dict, List, Optional
from uuid import UUID

from ..domain import Link, User
from .base import BaseLinkStore, BaseUserStore

DEFAULT_STRIPES = 64


class LinkStore(BaseLinkStore):
    def __init__(self, stripes: int = DEFAULT_STRIPES):
        """
        Initialize an empty store.

        Internal schema:
            self.links = {short_code: Link}

        Args:
            stripes (int): Number of striped locks used by `lock_for`.
        """
        if stripes <= 0:
            raise ValueError("stripes must be positive")
        self.links: Dict[str, Link] = {}
        self._lock = threading.Lock()
        self._stripes = [threading.Lock() for _ in range(stripes)]

    def lock_for(self, code: str) -> threading.Lock:
        return self._stripes[hash(code) % len(self._stripes)]

    def save(self, link: Link) -> None:
        with self._lock:
            self.links[link.short_code] = link

    def save_if_absent(self, link: Link) -> bool:
        with self._lock:
            if link.short_code in self.links:
                return False
            self.links[link.short_code] = link
            return True

    def find_by_code(self, code: str) -> Optional[Link]:
        with self._lock:
            return self.links.get(code)

    def find_by_owner(self, user_id: UUID) -> List[Link]:
        with self._lock:
            return [link for link in self.links.values() if link.owner_id == user_id]

    def scan_all(self) -> List[Link]:
        with self._lock:
            return list(self.links.values())

    def delete(self, code: str) -> bool:
        with self._lock:
            return self.links.pop(code, None) is not None

    def exists(self, code: str) -> bool:
        with self._lock:
            return code in self.links

    def __len__(self) -> int:
        with self._lock:
            return len(self.links)


class UserStore(BaseUserStore):
    def __init__(self):
        self.users: Dict[UUID, User] = {}
        self._lock = threading.Lock()

    def save(self, user: User) -> None:
        with self._lock:
            self.users[user.id] = user

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self.users.get(user_id)

    def exists(self, user_id: UUID) -> bool:
        with self._lock:
            return user_id in self.users
