"""Demo user directory.

Stands in for a real authentication service: users are looked up by email
and never created or destroyed by the core.
"""

from .models import User

DEMO_USERS: tuple[User, ...] = (
    User(id=1, full_name="Asha Kumar", email="asha.kumar@example.com"),
    User(id=2, full_name="Rahul Singh", email="rahul.singh@example.com"),
    User(id=3, full_name="Demo Admin", email="admin@example.com"),
)


class UserDirectory:
    """Looks up demo users by email (case-insensitive)."""

    def __init__(self, users: tuple[User, ...] | list[User] = DEMO_USERS):
        self._users = tuple(users)

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    def login(self, email: str) -> User | None:
        """Return the user with this email, or None if unknown."""
        wanted = email.strip().lower()
        for user in self._users:
            if user.email.lower() == wanted:
                return user
        return None
