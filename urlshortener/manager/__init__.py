from .link_service import LinkService, MAX_CODE_ATTEMPTS
from .reaper import Reaper
from .strategies import ALPHABET, BaseCodeGenerator, ShortCodeGenerator
from .user_service import UserService

__all__ = [
    "ALPHABET",
    "BaseCodeGenerator",
    "LinkService",
    "MAX_CODE_ATTEMPTS",
    "Reaper",
    "ShortCodeGenerator",
    "UserService",
]
