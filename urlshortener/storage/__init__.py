from .base import BaseLinkStore, BaseUserStore
from .storage import LinkStore, UserStore

__all__ = ["BaseLinkStore", "BaseUserStore", "LinkStore", "UserStore"]
