from .link import Link, MAX_URL_LENGTH, SHORT_CODE_PATTERN
from .user import User

__all__ = ["Link", "User", "MAX_URL_LENGTH", "SHORT_CODE_PATTERN"]
