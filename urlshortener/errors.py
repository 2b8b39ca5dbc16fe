"""
Error kinds for the URL shortener.

Every failure a domain operation can report is a subclass of `ShortenerError`.
Each kind also derives from the closest builtin exception so callers that only
care about the broad category (``ValueError``, ``LookupError`` ...) keep working.

The interactive shell is the only place these are turned into user-visible text.
"""

from typing import Optional


class ShortenerError(Exception):
    """Base class for all domain errors."""


class InvalidUrl(ShortenerError, ValueError):
    """URL empty, too long, wrong scheme, or a non-positive click limit."""


class InvalidConfiguration(ShortenerError, ValueError):
    """A construction-time invariant was violated (e.g. code length <= 0)."""


class NotFound(ShortenerError, LookupError):
    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"Link not found: {code}")


class Forbidden(ShortenerError, PermissionError):
    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"You are not allowed to delete link {code}")


class LinkUnavailable(ShortenerError):
    """
    A link exists but can no longer be resolved.

    Attributes:
        code (str): Short code that was resolved.
        reason (str): Machine-friendly reason ("expired", "limit_reached", "inactive").
    """

    reason = "unavailable"

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"Link {code} is unavailable")


class Expired(LinkUnavailable):
    reason = "expired"

    def __init__(self, code: str):
        super().__init__(code, f"Link {code} has expired")


class LimitReached(LinkUnavailable):
    reason = "limit_reached"

    def __init__(self, code: str):
        super().__init__(code, f"Link {code} has reached its click limit")


class Inactive(LinkUnavailable):
    reason = "inactive"

    def __init__(self, code: str):
        super().__init__(code, f"Link {code} is inactive")


class CodeExhausted(ShortenerError, RuntimeError):
    """No unused short code could be found after bounded retries."""


class BrowserError(ShortenerError, OSError):
    """The host browser could not be launched."""
