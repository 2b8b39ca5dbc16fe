"""
Entry point for the interactive URL shortener.

Responsibilities:
    - Load configuration from a properties file
    - Wire stores, services, notifier and reaper together
    - Run the interactive shell until `exit`, EOF or Ctrl-C

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory stores only; nothing survives the process.
    - The reaper is acquired for the lifetime of the shell and always released,
      whether the loop ends normally or with an exception.
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import Callable, List, Optional, TextIO

from urlshortener.cli import BaseBrowserLauncher, BrowserLauncher, EchoBrowserLauncher, ShortenerShell
from urlshortener.config import AppConfig, load_config
from urlshortener.errors import InvalidConfiguration
from urlshortener.manager import LinkService, Reaper, ShortCodeGenerator, UserService
from urlshortener.notifications import Notifier
from urlshortener.storage import LinkStore, UserStore

log = logging.getLogger("urlshortener")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def create_app(
    config: Optional[AppConfig] = None,
    *,
    browser: Optional[BaseBrowserLauncher] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> ShortenerShell:
    """
    Factory function to build a fully wired shell with fresh in-memory state.

    Args:
        config (Optional[AppConfig]): Settings; defaults when omitted.
        browser (Optional[BaseBrowserLauncher]): Launcher for `use`.
        stdin/stdout/stderr: Streams for the shell (tests pass StringIO).
        clock: Source of "now" shared by every component.

    Returns:
        ShortenerShell: Ready to `cmdloop()`; its reaper is not started yet.

    Raises:
        InvalidConfiguration: If a construction-time invariant is violated.
    """
    config = config or AppConfig()
    notifier = Notifier(enabled=config.notifications_enabled, stream=stdout, clock=clock)
    link_service = LinkService(
        store=LinkStore(),
        generator=ShortCodeGenerator(config.short_code_length),
        notifier=notifier,
        ttl=config.link_ttl,
        default_click_limit=config.default_click_limit,
        clock=clock,
    )
    reaper = Reaper(link_service.cleanup, config.cleanup_interval)
    return ShortenerShell(
        links=link_service,
        users=UserService(UserStore()),
        notifier=notifier,
        reaper=reaper,
        browser=browser or BrowserLauncher(),
        config=config,
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
        clock=clock,
    )


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive console URL shortener")
    parser.add_argument("--config", help="Path to a properties file (default: application.properties)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (INFO shows cleanup activity)",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Print resolved URLs instead of opening a browser",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
        shell = create_app(config, browser=EchoBrowserLauncher() if args.no_browser else None)
    except InvalidConfiguration as exc:
        log.error("Fatal configuration error: %s", exc)
        return EXIT_CONFIG_ERROR

    log.info("Starting with %s", config)
    with shell.reaper:
        try:
            shell.cmdloop()
        except KeyboardInterrupt:
            shell.postloop()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
