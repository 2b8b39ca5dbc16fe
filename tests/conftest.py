"""
Global pytest fixtures for the URL shortener test suite.

Responsibilities:
    - Provide fresh in-memory LinkStore / UserStore fixtures
    - Provide a controllable clock so expiry is tested without sleeping
    - Provide a recording notifier double and a scripted code generator
    - Provide a LinkService wired to all of the above
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Tuple
from uuid import UUID, uuid4

import pytest

from urlshortener.domain import Link
from urlshortener.manager import BaseCodeGenerator, LinkService, ShortCodeGenerator, UserService
from urlshortener.notifications import BaseNotifier
from urlshortener.storage import LinkStore, UserStore

START = datetime(2026, 1, 1, 12, 0, 0)


class FakeClock:
    """Manually advanced clock; call it to read the current instant."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class RecordingNotifier(BaseNotifier):
    """Notifier double that records every event as a tuple."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.events: List[Tuple] = []

    def notify_expired(self, owner_id: UUID, code: str, url: str) -> None:
        self.events.append(("expired", owner_id, code, url))

    def notify_limit_reached(self, owner_id: UUID, code: str, url: str) -> None:
        self.events.append(("limit_reached", owner_id, code, url))

    def notify_unavailable(self, code: str, reason: str) -> None:
        self.events.append(("unavailable", code, reason))

    def notify_success(self, message: str) -> None:
        self.events.append(("success", message))

    def display_info(self, link: Link, short_domain: str) -> None:
        self.events.append(("info", link.short_code, short_domain))

    def kinds(self) -> List[str]:
        return [event[0] for event in self.events]


class ScriptedGenerator(BaseCodeGenerator):
    """Returns codes from a fixed script, recording the inputs it was asked for."""

    def __init__(self, codes: Iterable[str], length: int = 6):
        self.codes = list(codes)
        self.length = length
        self.calls: List[Tuple[str, UUID]] = []

    def generate(self, url: str, user_id: UUID) -> str:
        self.calls.append((url, user_id))
        index = min(len(self.calls) - 1, len(self.codes) - 1)
        return self.codes[index]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store() -> LinkStore:
    return LinkStore()


@pytest.fixture
def user_store() -> UserStore:
    return UserStore()


@pytest.fixture
def users(user_store: UserStore) -> UserService:
    return UserService(user_store)


@pytest.fixture
def service(store: LinkStore, notifier: RecordingNotifier, clock: FakeClock) -> LinkService:
    """LinkService with a 24h TTL, default limit 10 and 6-character codes."""
    return LinkService(
        store=store,
        generator=ShortCodeGenerator(6),
        notifier=notifier,
        ttl=timedelta(hours=24),
        default_click_limit=10,
        clock=clock,
    )


@pytest.fixture
def alice() -> UUID:
    return uuid4()


@pytest.fixture
def bob() -> UUID:
    return uuid4()
