from .base import BaseNotifier
from .notifier import Notifier, render_link_info, short_url

__all__ = ["BaseNotifier", "Notifier", "render_link_info", "short_url"]
