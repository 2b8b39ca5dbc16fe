"""
urlshortener package initializer.
"""

from . import cli
from . import domain
from . import manager
from . import notifications
from . import storage

__all__ = ["cli", "domain", "manager", "notifications", "storage"]
