"""Access to environment variables."""

from __future__ import annotations

import os


def get_editor() -> str:
    """Return the user's editor from ``$EDITOR``, falling back to ``$VISUAL``."""
    for variable in ("EDITOR", "VISUAL"):
        value = os.environ.get(variable)
        if value is not None:
            return value
    raise LookupError("could not find editor")


def get_single_var(variable: str) -> str | None:
    """Return the value of an environment variable, or None if it is unset."""
    return os.environ.get(variable)