from .browser import BaseBrowserLauncher, BrowserLauncher, EchoBrowserLauncher
from .shell import ShortenerShell

__all__ = ["BaseBrowserLauncher", "BrowserLauncher", "EchoBrowserLauncher", "ShortenerShell"]
