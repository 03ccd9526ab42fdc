"""Running the user's editor."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable
from pathlib import Path

from pacdef.env import get_editor


def run_edit_command(files: Iterable[str | os.PathLike[str]]) -> int:
    """Open ``files`` in the user's editor and return its exit code.

    The working directory is the parent of the first file.
    """
    paths = [Path(file) for file in files]
    if not paths:
        raise ValueError("no files to edit")
    editor = get_editor()
    completed = subprocess.run(
        [editor, *(str(path) for path in paths)],
        cwd=paths[0].parent,
        check=False,
    )
    return completed.returncode