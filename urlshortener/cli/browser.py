"""
Browser launchers used by the `use` command.
"""

import sys
import webbrowser
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from ..errors import BrowserError


class BaseBrowserLauncher(ABC):
    @abstractmethod
    def open(self, url: str) -> None:  # pragma: no cover
        """
        Raises:
            BrowserError: If the URL could not be handed to a browser.
        """
        raise NotImplementedError


class BrowserLauncher(BaseBrowserLauncher):
    """Opens URLs in the host's default browser via `webbrowser`."""

    def open(self, url: str) -> None:
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as exc:
            raise BrowserError(f"Could not launch browser: {exc}") from exc
        if not opened:
            raise BrowserError("No runnable browser found on this system")


class EchoBrowserLauncher(BaseBrowserLauncher):
    """Headless launcher: prints the URL instead of opening it."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def open(self, url: str) -> None:
        out = self.stream or sys.stdout
        out.write(f"Open this URL in your browser: {url}\n")
