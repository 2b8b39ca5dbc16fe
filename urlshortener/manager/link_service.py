"""
LinkService module for the URL shortener.

Responsibilities:
    - Validate URLs and click limits
    - Allocate per-user deterministic short codes, retrying on collisions
    - Resolve ("consume") links atomically: one click, or a precise reason why not
    - Enforce ownership on delete
    - Reclaim expired and exhausted links for the Reaper

Design notes:
    - The store is the only shared mutable state. Every read-modify-write on a
      code (resolve, delete, eviction) runs under that code's striped lock, so
      for a single code those operations are totally ordered.
    - Expiry is checked before the quota: a link that is both expired and
      exhausted reports `Expired`.
    - Notifier events for `Expired` and `LimitReached` are emitted before the
      error is raised.
    - Callers receive copies of records; the stored Link never leaves the service.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterator, List, Optional
from uuid import UUID

from pydantic import ValidationError

from ..domain import Link, MAX_URL_LENGTH
from ..errors import (
    CodeExhausted,
    Expired,
    Forbidden,
    Inactive,
    InvalidConfiguration,
    InvalidUrl,
    LimitReached,
    NotFound,
)
from ..notifications import BaseNotifier
from ..storage import BaseLinkStore
from .strategies import BaseCodeGenerator

log = logging.getLogger("urlshortener.links")

Clock = Callable[[], datetime]

MAX_CODE_ATTEMPTS = 10
ALLOWED_PREFIXES = ("http://", "https://")


class LinkService:
    """
    Transactional facade over the link store; the only component callers touch.
    """

    def __init__(
        self,
        store: BaseLinkStore,
        generator: BaseCodeGenerator,
        notifier: BaseNotifier,
        *,
        ttl: timedelta,
        default_click_limit: int,
        clock: Clock = datetime.now,
    ):
        """
        Args:
            store (BaseLinkStore): Backing link store.
            generator (BaseCodeGenerator): Short-code generator.
            notifier (BaseNotifier): Receives expiry / quota events.
            ttl (timedelta): Lifetime of a new link.
            default_click_limit (int): Limit used when create() gets none.
            clock (Clock): Source of "now"; injectable for tests.

        Raises:
            InvalidConfiguration: If ttl or default_click_limit is not positive.
        """
        if ttl <= timedelta(0):
            raise InvalidConfiguration(f"Link TTL must be positive, got {ttl}")
        if default_click_limit <= 0:
            raise InvalidConfiguration(
                f"Default click limit must be positive, got {default_click_limit}"
            )
        self.store = store
        self.generator = generator
        self.notifier = notifier
        self.ttl = ttl
        self.default_click_limit = default_click_limit
        self.clock = clock

    # ---------------------------------------------------------------------
    # Validation helpers
    # ---------------------------------------------------------------------
    def _validate_url(self, url: str) -> None:
        """
        Raises:
            InvalidUrl: If the URL is empty, longer than 2000 characters, or does
                not start with http:// or https:// (case-insensitive).
        """
        if not url or not url.strip():
            raise InvalidUrl("URL cannot be empty")
        if len(url) > MAX_URL_LENGTH:
            raise InvalidUrl(f"URL is too long (maximum {MAX_URL_LENGTH} characters)")
        if not url.lower().startswith(ALLOWED_PREFIXES):
            raise InvalidUrl("URL must start with http:// or https://")

    def _resolve_limit(self, click_limit: Optional[int]) -> int:
        if click_limit is None:
            return self.default_click_limit
        if isinstance(click_limit, bool) or not isinstance(click_limit, int) or click_limit <= 0:
            raise InvalidUrl(f"Click limit must be a positive integer, got {click_limit!r}")
        return click_limit

    def _candidate_codes(self, url: str, user_id: UUID) -> Iterator[str]:
        """The primary code, then up to MAX_CODE_ATTEMPTS salted retries."""
        yield self.generator.generate(url, user_id)
        for attempt in range(MAX_CODE_ATTEMPTS):
            yield self.generator.generate(f"{url}{attempt}", user_id)

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def create(self, url: str, user_id: UUID, click_limit: Optional[int] = None) -> Link:
        """
        Create a short link owned by `user_id`.

        Rules:
            - Validate URL (non-empty, <= 2000 chars, http/https).
            - Use `click_limit` when given (must be positive), else the default.
            - Try the deterministic code; on collision retry with `url + attempt`
              for attempt = 0..9.
            - The code is claimed with an insert-if-absent, so two concurrent
              creators can never both own one code.

        Returns:
            Link: A copy of the stored record.

        Raises:
            InvalidUrl: On a bad URL or non-positive limit.
            CodeExhausted: If every candidate code is taken.
        """
        self._validate_url(url)
        limit = self._resolve_limit(click_limit)
        now = self.clock()

        for code in self._candidate_codes(url, user_id):
            if self.store.exists(code):
                log.debug("Short code %s already taken, retrying", code)
                continue
            try:
                link = Link.create(
                    short_code=code,
                    original_url=url,
                    owner_id=user_id,
                    created_at=now,
                    ttl=self.ttl,
                    click_limit=limit,
                )
            except ValidationError as exc:
                raise InvalidUrl(f"Cannot create link: {exc}") from exc
            if self.store.save_if_absent(link):
                log.debug("Created %s -> %s for %s", code, url, user_id)
                return link.model_copy()

        raise CodeExhausted(
            f"Unable to generate a unique short code after {MAX_CODE_ATTEMPTS} attempts"
        )

    def resolve(self, code: str) -> str:
        """
        Consume one click of `code` and return its original URL.

        The whole decision and the increment happen under the code's lock:
            - absent               -> NotFound
            - now >= expires_at    -> deactivate, notify owner, Expired
            - clicks >= limit      -> deactivate, notify owner, LimitReached
            - inactive otherwise   -> Inactive
            - else                 -> click_count += 1 (deactivate on the last click)

        Raises:
            NotFound, Expired, LimitReached, Inactive
        """
        with self.store.lock_for(code):
            link = self.store.find_by_code(code)
            if link is None:
                raise NotFound(code)

            now = self.clock()
            if link.is_expired(now):
                link.active = False
                self.store.save(link)
                log.debug("Rejected %s: expired at %s", code, link.expires_at)
                self.notifier.notify_expired(link.owner_id, code, link.original_url)
                raise Expired(code)

            if link.quota_reached:
                link.active = False
                self.store.save(link)
                log.debug("Rejected %s: %d/%d clicks used", code, link.click_count, link.click_limit)
                self.notifier.notify_limit_reached(link.owner_id, code, link.original_url)
                raise LimitReached(code)

            if not link.active:
                raise Inactive(code)

            link.click_count += 1
            if link.click_count == link.click_limit:
                link.active = False
            self.store.save(link)
            log.debug("Resolved %s (%d/%d)", code, link.click_count, link.click_limit)
            return link.original_url

    def list(self, user_id: UUID) -> List[Link]:
        """Copies of every link owned by `user_id`, in no particular order."""
        snapshot = []
        for link in self.store.find_by_owner(user_id):
            with self.store.lock_for(link.short_code):
                snapshot.append(link.model_copy())
        return snapshot

    def info(self, code: str) -> Link:
        """
        Read-only lookup.

        Raises:
            NotFound: If no link has this code.
        """
        with self.store.lock_for(code):
            link = self.store.find_by_code(code)
            if link is None:
                raise NotFound(code)
            return link.model_copy()

    def delete(self, code: str, requester_id: UUID) -> None:
        """
        Delete a link on behalf of its owner.

        Raises:
            NotFound: If no link has this code.
            Forbidden: If `requester_id` is not the owner; the record is kept.
        """
        with self.store.lock_for(code):
            link = self.store.find_by_code(code)
            if link is None:
                raise NotFound(code)
            if not link.is_owned_by(requester_id):
                raise Forbidden(code)
            self.store.delete(code)
        log.debug("Deleted %s on behalf of %s", code, requester_id)

    def cleanup(self) -> int:
        """
        Evict every link that is expired or inactive for any reason.

        Each candidate is re-checked under its lock, so a link that a
        concurrent create reissued in the meantime is judged on its own state.

        Returns:
            int: Number of links removed.
        """
        now = self.clock()
        removed = 0
        for candidate in self.store.scan_all():
            code = candidate.short_code
            with self.store.lock_for(code):
                current = self.store.find_by_code(code)
                if current is None:
                    continue
                if (current.is_expired(now) or not current.active) and self.store.delete(code):
                    removed += 1
        if removed:
            log.debug("Cleanup removed %d link(s)", removed)
        return removed
