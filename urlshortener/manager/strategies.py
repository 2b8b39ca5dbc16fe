"""
Short-code generation for the URL shortener.

Provided generators:
- ShortCodeGenerator: Deterministic SHA-256(user_id|url) -> URL-safe Base64 ->
  fold each character onto a 62-letter alphabet -> exactly L characters.

Properties:
- Pure: the same (url, user_id) always yields the same code.
- Per-user: the user id is part of the hashed payload, so two users shortening
  the same URL get different codes.
- Truncation admits collisions between different inputs; the service retries
  with a salted URL (see LinkService).

Lengths above 16 need more than one SHA-256 block of input bytes; further
blocks are derived by hashing the payload with a block counter.
"""

import base64
import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID

from ..errors import InvalidConfiguration

ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
DEFAULT_CODE_LENGTH = 6


def _digest_bytes(payload: bytes, size: int) -> bytes:
    """Return at least `size` bytes: sha256(payload), then sha256(payload|n) blocks."""
    out = hashlib.sha256(payload).digest()
    block = 1
    while len(out) < size:
        out += hashlib.sha256(payload + b"|" + block.to_bytes(4, "big")).digest()
        block += 1
    return out[:size]


class BaseCodeGenerator(ABC):
    """Abstract base for short-code generators."""

    length: int

    @abstractmethod
    def generate(self, url: str, user_id: UUID) -> str:
        """Return a code of exactly `self.length` characters from ALPHABET."""
        raise NotImplementedError


@dataclass(frozen=True)
class ShortCodeGenerator(BaseCodeGenerator):
    """Deterministic per-user SHA-256 generator."""
    length: int = DEFAULT_CODE_LENGTH

    def __post_init__(self):
        if self.length <= 0:
            raise InvalidConfiguration(f"Short code length must be positive, got {self.length}")

    def generate(self, url: str, user_id: UUID) -> str:
        payload = f"{user_id}|{url}".encode("utf-8")
        digest = _digest_bytes(payload, 2 * self.length)
        rendered = base64.urlsafe_b64encode(digest).rstrip(b"=")
        # Iterating bytes yields the raw character values.
        return "".join(ALPHABET[c % len(ALPHABET)] for c in rendered[: self.length])
