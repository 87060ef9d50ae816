"""Client-side chat commands that never reach the model."""

import re

RENAME_PATTERN = re.compile(r"""/rename\s+(?:"([^"]+)"|'([^']+)'|(.+))""")


def parse_rename_command(text: str) -> str | None:
    """Extract the new name from a /rename command.

    Accepts /rename "Name", /rename 'Name' or /rename Name.

    Args:
        text: Raw chat input

    Returns:
        The trimmed new name, or None if the input is not a rename command
    """
    match = RENAME_PATTERN.fullmatch(text.strip())
    if match is None:
        return None
    name = next((group for group in match.groups() if group), "").strip()
    return name or None
