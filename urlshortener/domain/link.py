"""
Link record for the URL shortener.

Responsibilities:
    - Hold the data of one short link (target, owner, expiry, click quota)
    - Validate construction-time invariants in a single place
    - Answer read-only questions (expired? usable? owned by? clicks left?)

Design notes:
    - `Link.create` is the only construction path used by the service; it returns
      a complete, validated record or raises, so no partial Link is ever stored.
    - Identity fields are frozen; only `click_count` and `active` change, and only
      under the per-code lock held by LinkService.resolve.
    - Equality and hashing depend solely on `short_code`.
"""

from datetime import datetime, timedelta
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

SHORT_CODE_PATTERN = r"^[A-Za-z0-9]+$"
MAX_URL_LENGTH = 2000


class Link(BaseModel):
    model_config = ConfigDict(extra="forbid")

    short_code: str = Field(pattern=SHORT_CODE_PATTERN, frozen=True)
    original_url: str = Field(min_length=1, max_length=MAX_URL_LENGTH, frozen=True)
    owner_id: UUID = Field(frozen=True)
    created_at: datetime = Field(frozen=True)
    expires_at: datetime = Field(frozen=True)
    click_limit: int = Field(gt=0, frozen=True)
    click_count: int = Field(default=0, ge=0)
    active: bool = True

    @model_validator(mode="after")
    def _check_invariants(self) -> "Link":
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")
        if self.click_count > self.click_limit:
            raise ValueError("click_count cannot exceed click_limit")
        return self

    @classmethod
    def create(
        cls,
        *,
        short_code: str,
        original_url: str,
        owner_id: UUID,
        created_at: datetime,
        ttl: timedelta,
        click_limit: int,
    ) -> "Link":
        """
        Build a fresh link: zero clicks, active, expiring `ttl` after `created_at`.

        Raises:
            pydantic.ValidationError: If any field violates the record invariants.
        """
        return cls(
            short_code=short_code,
            original_url=original_url,
            owner_id=owner_id,
            created_at=created_at,
            expires_at=created_at + ttl,
            click_limit=click_limit,
        )

    # ------------------------------------------------------------------
    # Read-only helpers
    # ------------------------------------------------------------------
    @property
    def remaining_clicks(self) -> int:
        return max(0, self.click_limit - self.click_count)

    @property
    def quota_reached(self) -> bool:
        return self.click_count >= self.click_limit

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_usable(self, now: datetime) -> bool:
        """An expired link reads as inactive even if the stored flag is still set."""
        return self.active and not self.is_expired(now)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.owner_id == user_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return self.short_code == other.short_code

    def __hash__(self) -> int:
        return hash(self.short_code)
