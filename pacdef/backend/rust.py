"""Backend for Rust programs installed with cargo."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pacdef.backend.base import Backend
from pacdef.grouping.package import Package
from pacdef.paths import get_home_dir


def get_crates_file() -> Path:
    """Return the path of cargo's record of installed crates."""
    return get_home_dir() / ".cargo" / ".crates2.json"


def extract_packages(json_value: Any) -> set[Package]:
    """Return the crates named in the ``installs`` object of cargo's crates file."""
    if not isinstance(json_value, dict) or "installs" not in json_value:
        raise ValueError("get 'installs' field from json")
    installs = json_value["installs"]
    if not isinstance(installs, dict):
        raise ValueError("'installs' field is not an object")
    return {Package.from_string(identifier.split()[0]) for identifier in installs}


class Rust(Backend):
    """Binaries installed with ``cargo install``."""

    section = "rust"
    default_binary = "cargo"
    switches_info = ("search", "--limit", "1")
    switches_install = ("install",)
    switches_remove = ("uninstall",)
    supports_as_dependency = False

    def get_all_installed_packages(self) -> set[Package]:
        """Return the crates recorded in cargo's crates file."""
        content = get_crates_file().read_text(encoding="utf-8")
        return extract_packages(json.loads(content))

    def get_explicitly_installed_packages(self) -> set[Package]:
        """Every installed crate was installed explicitly."""
        return self.get_all_installed_packages()

    def make_dependency(self, packages: Iterable[Package]) -> int:
        """cargo has no notion of dependency packages; always raises."""
        raise RuntimeError(f"not supported by {self.default_binary}")