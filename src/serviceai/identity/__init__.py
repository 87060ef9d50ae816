"""Identity module: the authenticated user the core acts on behalf of."""

from .directory import DEMO_USERS, UserDirectory
from .models import User

__all__ = [
    "DEMO_USERS",
    "User",
    "UserDirectory",
]
