"""
Console notifier for the URL shortener.

Responsibilities:
    - Render boxed, human-readable messages when a link becomes unusable
    - Render success lines and the link-info view
    - Do nothing at all when notifications are disabled

Output goes to the given stream, or to the current `sys.stdout` at call time.
"""

import sys
from datetime import datetime
from typing import Callable, List, Optional, TextIO
from uuid import UUID

from ..domain import Link
from .base import BaseNotifier

BOX_WIDTH = 60


def _banner(title: str) -> List[str]:
    return [
        "",
        "+" + "=" * BOX_WIDTH + "+",
        "|" + title.center(BOX_WIDTH) + "|",
        "+" + "=" * BOX_WIDTH + "+",
    ]


def short_url(link: Link, short_domain: str) -> str:
    return f"{short_domain}/{link.short_code}"


def render_link_info(link: Link, short_domain: str, now: datetime) -> str:
    """
    Format the full metadata of a link.

    Args:
        link (Link): Record to describe.
        short_domain (str): Domain prefix for the short URL (e.g. "clck.ru").
        now (datetime): Reference instant used to decide the status line.

    Returns:
        str: Multi-line block, without a trailing newline.
    """
    status = "Active" if link.is_usable(now) else "Inactive"
    lines = _banner("Link information") + [
        f"  Short URL: {short_url(link, short_domain)}",
        f"  Original URL: {link.original_url}",
        f"  Owner ID: {link.owner_id}",
        f"  Created: {link.created_at:%Y-%m-%d %H:%M:%S}",
        f"  Expires: {link.expires_at:%Y-%m-%d %H:%M:%S}",
        f"  Clicks: {link.click_count}/{link.click_limit} (remaining: {link.remaining_clicks})",
        f"  Status: {status}",
    ]
    return "\n".join(lines)


class Notifier(BaseNotifier):
    def __init__(
        self,
        enabled: bool = True,
        stream: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            enabled (bool): When False every operation is a no-op.
            stream (Optional[TextIO]): Output stream; defaults to sys.stdout.
            clock (Callable[[], datetime]): Source of "now" for the info view.
        """
        self.enabled = enabled
        self.stream = stream
        self.clock = clock

    def _emit(self, lines: List[str]) -> None:
        out = self.stream or sys.stdout
        out.write("\n".join(lines) + "\n")
        out.flush()

    def _owner_notice(self, title: str, owner_id: UUID, code: str, url: str, reason: str) -> None:
        self._emit(_banner(title) + [
            f"  User ID: {owner_id}",
            f"  Short code: {code}",
            f"  Original URL: {url}",
            f"  Reason: {reason}",
            "  Action: create a new short link to keep using this URL",
            "",
        ])

    def notify_expired(self, owner_id: UUID, code: str, url: str) -> None:
        if not self.enabled:
            return
        self._owner_notice("NOTICE: link expired", owner_id, code, url, "time-to-live elapsed")

    def notify_limit_reached(self, owner_id: UUID, code: str, url: str) -> None:
        if not self.enabled:
            return
        self._owner_notice("NOTICE: click limit reached", owner_id, code, url,
                           "maximum number of clicks reached")

    def notify_unavailable(self, code: str, reason: str) -> None:
        if not self.enabled:
            return
        self._emit(_banner("NOTICE: link unavailable") + [
            f"  Short code: {code}",
            f"  Reason: {reason}",
            "",
        ])

    def notify_success(self, message: str) -> None:
        if not self.enabled:
            return
        self._emit(["", f"OK {message}"])

    def display_info(self, link: Link, short_domain: str) -> None:
        if not self.enabled:
            return
        self._emit([render_link_info(link, short_domain, self.clock()), ""])
