"""Backend for Debian and derivatives, driven by apt."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from pacdef.backend.base import Backend
from pacdef.grouping.package import Package

DEFAULT_STATUS_FILE = Path("/var/lib/dpkg/status")
DEFAULT_EXTENDED_STATES_FILE = Path("/var/lib/apt/extended_states")

_NOT_INSTALLED_STATES = frozenset({"not-installed", "config-files"})


def we_are_root() -> bool:
    """Tell whether the effective user is root."""
    return os.geteuid() == 0


def build_base_command_with_privileges(binary: str) -> list[str]:
    """Return the start of a command running ``binary``, through sudo unless we are root."""
    if we_are_root():
        return [binary]
    return ["sudo", binary]


def _read_stanzas(path: Path) -> list[dict[str, str]]:
    """Parse a deb822-style file into its stanzas."""
    stanzas: list[dict[str, str]] = []
    current: dict[str, str] = {}
    last_key: str | None = None
    for line in path.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            if current:
                stanzas.append(current)
            current = {}
            last_key = None
        elif line[0] in " \t":
            if last_key is not None:
                current[last_key] += "\n" + line.strip()
        else:
            key, _, value = line.partition(":")
            last_key = key.strip()
            current[last_key] = value.strip()
    if current:
        stanzas.append(current)
    return stanzas


class Debian(Backend):
    """Packages managed by apt."""

    section = "debian"
    default_binary = "apt"
    switches_info = ("show",)
    switches_install = ("install",)
    switches_noconfirm = ("--yes",)
    switches_remove = ("remove",)
    supports_as_dependency = True

    def __init__(
        self,
        status_file: str | os.PathLike[str] | None = None,
        extended_states_file: str | os.PathLike[str] | None = None,
    ) -> None:
        super().__init__()
        self.status_file = Path(status_file) if status_file is not None else DEFAULT_STATUS_FILE
        self.extended_states_file = (
            Path(extended_states_file)
            if extended_states_file is not None
            else DEFAULT_EXTENDED_STATES_FILE
        )

    def _installed_names(self) -> set[str]:
        names: set[str] = set()
        for stanza in _read_stanzas(self.status_file):
            name = stanza.get("Package")
            status = stanza.get("Status", "").split()
            if name and status and status[-1] not in _NOT_INSTALLED_STATES:
                names.add(name)
        return names

    def _auto_installed_names(self) -> set[str]:
        if not self.extended_states_file.is_file():
            return set()
        return {
            stanza["Package"]
            for stanza in _read_stanzas(self.extended_states_file)
            if "Package" in stanza and stanza.get("Auto-Installed") == "1"
        }

    def get_all_installed_packages(self) -> set[Package]:
        """Return every installed package."""
        return {Package.from_string(name) for name in self._installed_names()}

    def get_explicitly_installed_packages(self) -> set[Package]:
        """Return the installed packages that are not marked as automatically installed."""
        auto = self._auto_installed_names()
        return {
            Package.from_string(name) for name in self._installed_names() if name not in auto
        }

    def _run_privileged(self, binary: str, arguments: Iterable[str]) -> int:
        import subprocess

        command = [*build_base_command_with_privileges(binary), *arguments]
        return subprocess.run(command, check=False).returncode

    def make_dependency(self, packages: Iterable[Package]) -> int:
        """Mark ``packages`` as automatically installed with apt-mark."""
        return self._run_privileged("apt-mark", ["auto", *(str(p) for p in packages)])

    def install_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Install ``packages`` with root privileges; return apt's exit code."""
        arguments = self._with_noconfirm(self.switches_install, noconfirm)
        return self._run_privileged(self.binary, [*arguments, *(str(p) for p in packages)])

    def remove_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Remove ``packages`` with root privileges; return apt's exit code."""
        arguments = self._with_noconfirm(self.switches_remove, noconfirm)
        return self._run_privileged(self.binary, [*arguments, *(str(p) for p in packages)])