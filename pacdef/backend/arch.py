"""Backend for Arch Linux, driven by pacman or an AUR helper."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from pacdef.backend.base import Backend
from pacdef.grouping.package import Package

DEFAULT_DB_PATH = Path("/var/lib/pacman/local")

_REASON_EXPLICIT = 0


def _parse_desc(content: str) -> dict[str, list[str]]:
    """Parse a pacman ``desc`` file into a mapping of field name to values."""
    fields: dict[str, list[str]] = {}
    current: list[str] | None = None
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("%") and stripped.endswith("%") and len(stripped) > 2:
            current = fields.setdefault(stripped[1:-1], [])
        elif not stripped:
            current = None
        elif current is not None:
            current.append(stripped)
    return fields


class Arch(Backend):
    """Packages managed by pacman; the binary may be replaced by an AUR helper."""

    section = "arch"
    default_binary = "pacman"
    switches_info = ("--query", "--info")
    switches_install = ("--sync",)
    switches_make_dependency = ("--database", "--asdeps")
    switches_noconfirm = ("--noconfirm",)
    switches_remove = ("--remove", "--recursive")
    supports_as_dependency = True

    def __init__(self, db_path: str | os.PathLike[str] | None = None) -> None:
        super().__init__()
        self.aur_rm_args: list[str] = []
        self.db_path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH

    def _local_packages(self) -> Iterator[tuple[str, int]]:
        """Yield the name and install reason of each package in the local database."""
        for entry in sorted(self.db_path.iterdir()):
            desc = entry / "desc"
            if not entry.is_dir() or not desc.is_file():
                continue
            fields = _parse_desc(desc.read_text(encoding="utf-8"))
            names = fields.get("NAME")
            if not names:
                continue
            reasons = fields.get("REASON")
            reason = int(reasons[0]) if reasons else _REASON_EXPLICIT
            yield names[0], reason

    def get_all_installed_packages(self) -> set[Package]:
        """Return every package in pacman's local database."""
        return {Package.from_string(name) for name, _ in self._local_packages()}

    def get_explicitly_installed_packages(self) -> set[Package]:
        """Return the packages in the local database that were installed explicitly."""
        return {
            Package.from_string(name)
            for name, reason in self._local_packages()
            if reason == _REASON_EXPLICIT
        }

    def install_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Install ``packages`` with the configured binary; return its exit code."""
        arguments = list(self.switches_install)
        if noconfirm:
            arguments.extend(self.switches_noconfirm)
        arguments.extend(str(package) for package in packages)
        return self._run(arguments)

    def remove_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Remove ``packages``, passing the extra removal arguments from the config."""
        arguments = [*self.switches_remove, *self.aur_rm_args]
        if noconfirm:
            arguments.extend(self.switches_noconfirm)
        arguments.extend(str(package) for package in packages)
        return self._run(arguments)