"""
Interactive command shell for the URL shortener.

Responsibilities:
    - Greet the user, mint a session identity and start the reaper
    - Parse command lines and dispatch to LinkService
    - Turn domain errors into one human-readable line each
    - Stop the reaper and say goodbye on exit

This is the only module that maps error kinds to user-visible text.
"""

import cmd
import logging
import sys
from datetime import datetime
from typing import Callable, Optional, TextIO

from ..config import AppConfig
from ..domain import Link, User
from ..errors import BrowserError, Inactive, LinkUnavailable, NotFound, ShortenerError
from ..manager import LinkService, Reaper, UserService
from ..notifications import BaseNotifier, render_link_info, short_url
from .browser import BaseBrowserLauncher

log = logging.getLogger("urlshortener.cli")

COMMANDS = [
    ("create", "Create a new short link"),
    ("use", "Use a short link (open the original URL)"),
    ("list", "List all your links"),
    ("info", "Show information about a link"),
    ("delete", "Delete a link"),
    ("help", "Show this help message"),
    ("exit", "Exit the application"),
]

USAGE = [
    ("create <URL> [limit]", "Create a short link (optional click limit)"),
    ("use <code>", "Open the original URL in the browser"),
    ("info <code>", "Show link information"),
    ("delete <code>", "Delete a link"),
    ("list", "List all your links"),
]

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class ShortenerShell(cmd.Cmd):
    prompt = "> "

    def __init__(
        self,
        links: LinkService,
        users: UserService,
        notifier: BaseNotifier,
        reaper: Reaper,
        browser: BaseBrowserLauncher,
        config: AppConfig,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
        user: Optional[User] = None,
    ):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.links = links
        self.users = users
        self.notifier = notifier
        self.reaper = reaper
        self.browser = browser
        self.config = config
        self.stderr = stderr
        self.clock = clock
        self.user = user

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------
    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _error(self, text: str) -> None:
        err = self.stderr or sys.stderr
        err.write(text + "\n")
        err.flush()

    def _success(self, message: str) -> None:
        if self.notifier.enabled:
            self.notifier.notify_success(message)
        else:
            self._print(f"OK {message}")

    def _usage(self, usage: str, example: str) -> None:
        self._print(f"Usage: {usage}")
        self._print(f"Example: {example}")

    @property
    def user_id(self):
        return self.user.id

    # ------------------------------------------------------------------
    # cmd.Cmd hooks
    # ------------------------------------------------------------------
    def preloop(self) -> None:
        self._print("+" + "=" * 60 + "+")
        self._print("|" + "URL Shortener - console edition".center(60) + "|")
        self._print("+" + "=" * 60 + "+")
        self._print("Type 'help' to see the available commands.")
        if self.user is None:
            self.user = self.users.create_user()
        self._print(f"Your user ID: {self.user.id}")
        self.reaper.start()

    def postloop(self) -> None:
        self.reaper.stop()
        self._print()
        self._print("Thank you for using the URL shortener!")
        if self.user is not None:
            self._print(f"Your user ID: {self.user.id}")
        self._print("Goodbye!")

    def precmd(self, line: str) -> str:
        parts = line.strip().split(None, 1)
        if not parts or parts[0] == "EOF":
            return line
        parts[0] = parts[0].lower()
        return " ".join(parts)

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> bool:
        self._print(f"Unknown command: {line.split()[0]}")
        self._print("Type 'help' to see the available commands.")
        return False

    def onecmd(self, line: str) -> bool:
        try:
            return super().onecmd(line)
        except ShortenerError as exc:
            log.debug("Command %r failed: %s", line, exc)
            self._error(f"Error: {exc}")
            return False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def do_help(self, arg: str) -> bool:
        self._print("Available commands:")
        for name, description in COMMANDS:
            self._print(f"  {name:<10} - {description}")
        self._print()
        self._print("Usage:")
        for usage, description in USAGE:
            self._print(f"  {usage:<22} - {description}")
        self._print()
        self._print("Examples:")
        self._print("  create https://example.com")
        self._print("  create https://example.com 20")
        self._print("  use 3DZHeG")
        return False

    def do_create(self, arg: str) -> bool:
        parts = arg.split()
        if not parts:
            self._usage("create <URL> [click_limit]", "create https://example.com 20")
            return False

        url = parts[0]
        limit = None
        if len(parts) > 1:
            try:
                limit = int(parts[1])
            except ValueError:
                self._error(f"Invalid click limit: {parts[1]}")
                return False
            if limit <= 0:
                self._error("Click limit must be positive")
                return False

        link = self.links.create(url, self.user_id, limit)
        self._print()
        self._print("Short link created!")
        self._print(f"  Short URL: {short_url(link, self.config.short_domain)}")
        self._print(f"  Original URL: {link.original_url}")
        self._print(f"  Click limit: {link.click_limit}")
        self._print(f"  Expires: {link.expires_at:{TIME_FORMAT}}")
        return False

    def do_use(self, arg: str) -> bool:
        code = arg.strip()
        if not code:
            self._usage("use <code>", "use 3DZHeG")
            return False

        try:
            url = self.links.resolve(code)
        except NotFound:
            self._error(f"Link not found: {code}")
            return False
        except LinkUnavailable as exc:
            if isinstance(exc, Inactive):
                self.notifier.notify_unavailable(code, str(exc))
            self._error(f"Link unavailable: {exc}")
            return False

        self._print(f"Redirecting to: {url}")
        try:
            self.browser.open(url)
        except BrowserError as exc:
            self._error(f"Could not open browser: {exc}")
        return False

    def _print_link(self, link: Link, now: datetime) -> None:
        status = "Active" if link.is_usable(now) else "Inactive"
        self._print(f"  Short code: {link.short_code}")
        self._print(f"  Original URL: {link.original_url}")
        self._print(f"  Clicks: {link.click_count}/{link.click_limit} ({status})")
        self._print(f"  Expires: {link.expires_at:{TIME_FORMAT}}")
        self._print()

    def do_list(self, arg: str) -> bool:
        links = self.links.list(self.user_id)
        if not links:
            self._print("You have no links yet.")
            self._print("Use 'create <URL>' to create a new short link.")
            return False

        now = self.clock()
        self._print("Your links:")
        self._print()
        for link in sorted(links, key=lambda item: item.created_at):
            self._print_link(link, now)
        self._print(f"Total: {len(links)} link(s)")
        return False

    def do_info(self, arg: str) -> bool:
        code = arg.strip()
        if not code:
            self._usage("info <code>", "info 3DZHeG")
            return False

        link = self.links.info(code)
        if self.notifier.enabled:
            self.notifier.display_info(link, self.config.short_domain)
        else:
            self._print(render_link_info(link, self.config.short_domain, self.clock()))
        return False

    def do_delete(self, arg: str) -> bool:
        code = arg.strip()
        if not code:
            self._usage("delete <code>", "delete 3DZHeG")
            return False

        self.links.delete(code, self.user_id)
        self._success(f"Link deleted: {code}")
        return False

    def do_exit(self, arg: str) -> bool:
        return True

    def do_EOF(self, arg: str) -> bool:
        self._print()
        return True
