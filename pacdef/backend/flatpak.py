"""Backend for Flatpak applications."""

from __future__ import annotations

import subprocess
from collections.abc import Iterable

from pacdef.backend.base import Backend
from pacdef.grouping.package import Package


class Flatpak(Backend):
    """Applications and runtimes managed by flatpak, system-wide or per user."""

    section = "flatpak"
    default_binary = "flatpak"
    switches_info = ("info",)
    switches_install = ("install",)
    switches_noconfirm = ("--assumeyes",)
    switches_remove = ("uninstall",)
    supports_as_dependency = False

    def __init__(self) -> None:
        super().__init__()
        self.systemwide = True

    def _switches_runtime(self) -> tuple[str, ...]:
        return () if self.systemwide else ("--user",)

    def get_installed_packages(self, include_implicit: bool) -> set[Package]:
        """List installed applications; with ``include_implicit`` also runtimes."""
        command = [self.binary, "list", "--columns=application"]
        if not include_implicit:
            command.append("--app")
        if not self.systemwide:
            command.append("--user")
        output = subprocess.run(command, capture_output=True, check=False).stdout.decode("utf-8")
        return {
            package
            for package in (Package.parse(line) for line in output.splitlines())
            if package is not None
        }

    def get_all_installed_packages(self) -> set[Package]:
        """Return installed applications and runtimes."""
        return self.get_installed_packages(True)

    def get_explicitly_installed_packages(self) -> set[Package]:
        """Return installed applications only."""
        return self.get_installed_packages(False)

    def install_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Install ``packages`` and return flatpak's exit code."""
        arguments = [*self.switches_install, *self._switches_runtime()]
        if noconfirm:
            arguments.extend(self.switches_noconfirm)
        arguments.extend(str(package) for package in packages)
        return self._run(arguments)

    def make_dependency(self, packages: Iterable[Package]) -> int:
        """Flatpak has no notion of dependency packages; always raises."""
        raise RuntimeError(f"not supported by {self.default_binary}")

    def remove_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Uninstall ``packages`` and return flatpak's exit code."""
        arguments = [*self.switches_remove, *self._switches_runtime()]
        if noconfirm:
            arguments.extend(self.switches_noconfirm)
        arguments.extend(str(package) for package in packages)
        return self._run(arguments)

    def show_package_info(self, package: Package) -> int:
        """Show flatpak's information on ``package``."""
        return self._run([*self.switches_info, *self._switches_runtime(), str(package)])