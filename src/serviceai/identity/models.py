"""User model supplied by the identity collaborator."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """An authenticated end user. Immutable for the session."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Numeric user id, matches UserID in the business data")
    full_name: str = Field(description="Full display name")
    email: str = Field(description="Email address used to log in")

    @property
    def first_name(self) -> str:
        """First whitespace-separated token of the full name."""
        parts = self.full_name.split()
        return parts[0] if parts else ""
