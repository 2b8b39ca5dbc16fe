"""
Abstract Base Class for notifiers.

Responsibilities:
    - Define the events a notifier must render (expired, quota reached,
      unavailable, success) plus the link-info view
    - Support easy substitution (console output, a recording test double, ...)

A notifier never keeps a reference to a Link beyond the call that receives it.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ..domain import Link

__all__ = ["BaseNotifier"]


class BaseNotifier(ABC):
    """Abstract base for pluggable notifiers."""

    enabled: bool = True

    @abstractmethod
    def notify_expired(self, owner_id: UUID, code: str, url: str) -> None:  # pragma: no cover
        """Tell the owner that `code` can no longer be used because its TTL elapsed."""
        raise NotImplementedError

    @abstractmethod
    def notify_limit_reached(self, owner_id: UUID, code: str, url: str) -> None:  # pragma: no cover
        """Tell the owner that `code` has used up its click quota."""
        raise NotImplementedError

    @abstractmethod
    def notify_unavailable(self, code: str, reason: str) -> None:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def notify_success(self, message: str) -> None:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def display_info(self, link: Link, short_domain: str) -> None:  # pragma: no cover
        """Render the full metadata of `link`."""
        raise NotImplementedError
