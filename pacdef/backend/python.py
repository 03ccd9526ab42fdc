"""Backend for Python packages installed with pip for the current user."""

from __future__ import annotations

import json
import subprocess
from collections.abc import Iterable, Sequence
from typing import Any

from pacdef.backend.base import Backend
from pacdef.grouping.package import Package

BINARY = "pip"


def run_pip_command(args: Sequence[str]) -> Any:
    """Run pip with ``args`` and return its output parsed as JSON."""
    completed = subprocess.run([BINARY, *args], capture_output=True, check=False)
    return json.loads(completed.stdout.decode("utf-8"))


def extract_packages(value: Any) -> set[Package]:
    """Return the packages named in pip's JSON package list."""
    if not isinstance(value, list):
        raise ValueError("getting inner json array")
    result: set[Package] = set()
    for node in value:
        name = node.get("name") if isinstance(node, dict) else None
        if not isinstance(name, str):
            raise ValueError("package name should always be a string")
        result.add(Package.from_string(name))
    return result


class Python(Backend):
    """Python packages managed by pip in the user's site."""

    section = "python"
    default_binary = BINARY
    switches_info = ("show",)
    switches_install = ("install",)
    switches_remove = ("uninstall",)
    supports_as_dependency = False

    def get_all_installed_packages(self) -> set[Package]:
        """Return all packages installed for the user."""
        return extract_packages(run_pip_command(["list", "--format", "json", "--user"]))

    def get_explicitly_installed_packages(self) -> set[Package]:
        """Return user packages that no other package requires."""
        return extract_packages(
            run_pip_command(["list", "--format", "json", "--not-required", "--user"])
        )

    def make_dependency(self, packages: Iterable[Package]) -> int:
        """pip has no notion of dependency packages; always raises."""
        raise RuntimeError(f"not supported by {BINARY}")