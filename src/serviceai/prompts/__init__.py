"""Prompt texts for the support agent and the title generator.

Each prompt lives in a .txt file next to this module. A file of the same
name under ./prompts/ in the working directory takes precedence, so
deployments can adjust wording without touching the package.
"""

from functools import lru_cache
from pathlib import Path

from ..identity import User

_PACKAGE_DIR = Path(__file__).parent


def _candidates(name: str) -> list[Path]:
    filename = f"{name}.txt"
    return [Path.cwd() / "prompts" / filename, _PACKAGE_DIR / filename]


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Return the text of prompt `name` (file name without .txt).

    Raises:
        FileNotFoundError: If neither the working-directory override nor the
            packaged file exists
    """
    paths = _candidates(name)
    for path in paths:
        if path.is_file():
            return path.read_text(encoding="utf-8")
    searched = "\n".join(f"  - {p}" for p in paths)
    raise FileNotFoundError(f"No prompt named {name!r}. Looked in:\n{searched}")


def get_support_prompt() -> str:
    """System instruction for the support agent, including the database schema."""
    return load_prompt("support_agent").replace("{db_schema}", load_prompt("db_schema"))


def get_title_prompt(seed_text: str) -> str:
    """Prompt asking for a short conversation title."""
    return load_prompt("title").replace("{message}", seed_text)


def build_identity_envelope(user: User, text: str) -> str:
    """Prefix a user query with the identity fields the model must use."""
    return (
        f"(User Details: UserID={user.id}, FullName={user.full_name}, Email={user.email})\n\n"
        f"User query: {text}"
    )


def build_live_instruction(user: User) -> str:
    """System instruction for a live voice session."""
    return f"{get_support_prompt()}\n\nCurrent User: {user.full_name} (ID: {user.id})"


def clear_cache() -> None:
    """Forget cached prompt texts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "build_identity_envelope",
    "build_live_instruction",
    "clear_cache",
    "get_support_prompt",
    "get_title_prompt",
    "load_prompt",
]
