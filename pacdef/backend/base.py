"""The common interface and behaviour of all package manager backends."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar

from pacdef.grouping.group import Group
from pacdef.grouping.package import Package


def group_assignments(to_assign: Iterable[tuple[Package, Group]]) -> dict[Group, list[Package]]:
    """Collect the packages assigned to each group, each list sorted."""
    result: dict[Group, list[Package]] = {}
    for package, group in to_assign:
        result.setdefault(group, []).append(package)
    for packages in result.values():
        packages.sort()
    return result


class Backend(ABC):
    """A package manager that pacdef can query and drive.

    Subclasses set the section name, the default binary and the switches
    passed to the binary for each operation.
    """

    section: ClassVar[str]
    default_binary: ClassVar[str]
    switches_info: ClassVar[tuple[str, ...]] = ()
    switches_install: ClassVar[tuple[str, ...]] = ()
    switches_noconfirm: ClassVar[tuple[str, ...]] = ()
    switches_remove: ClassVar[tuple[str, ...]] = ()
    switches_make_dependency: ClassVar[tuple[str, ...]] = ()
    supports_as_dependency: ClassVar[bool] = False

    def __init__(self) -> None:
        self.binary: str = self.default_binary
        self.packages: set[Package] = set()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(binary={self.binary!r}, packages={len(self.packages)})"

    def load(self, groups: Iterable[Group]) -> None:
        """Add the packages of this backend's section in all ``groups`` to the managed set."""
        for group in groups:
            for section in group.sections:
                if section.name == self.section:
                    for package in section.packages:
                        if package not in self.packages:
                            self.packages.add(package)

    @abstractmethod
    def get_all_installed_packages(self) -> set[Package]:
        """Return all packages installed on the system."""

    @abstractmethod
    def get_explicitly_installed_packages(self) -> set[Package]:
        """Return the packages that were installed explicitly."""

    def _run(self, arguments: Iterable[str]) -> int:
        completed = subprocess.run([self.binary, *arguments], check=False)
        return completed.returncode

    def _with_noconfirm(self, switches: Iterable[str], noconfirm: bool) -> list[str]:
        result = list(switches)
        if noconfirm:
            result.extend(self.switches_noconfirm)
        return result

    def assign_group(self, to_assign: Iterable[tuple[Package, Group]]) -> None:
        """Write each package into the section of this backend in its assigned group."""
        header = f"[{self.section}]"
        for group, packages in group_assignments(to_assign).items():
            group.save_packages(header, packages)

    def install_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Install ``packages`` and return the package manager's exit code."""
        arguments = self._with_noconfirm(self.switches_install, noconfirm)
        return self._run([*arguments, *(str(package) for package in packages)])

    def make_dependency(self, packages: Iterable[Package]) -> int:
        """Mark ``packages`` as dependencies and return the exit code."""
        return self._run(
            [*self.switches_make_dependency, *(str(package) for package in packages)]
        )

    def remove_packages(self, packages: Iterable[Package], noconfirm: bool) -> int:
        """Remove ``packages`` and return the package manager's exit code."""
        arguments = self._with_noconfirm(self.switches_remove, noconfirm)
        return self._run([*arguments, *(str(package) for package in packages)])

    def get_missing_packages_sorted(self) -> list[Package]:
        """Return managed packages that are not installed, sorted."""
        try:
            installed = self.get_all_installed_packages()
        except Exception as error:
            raise RuntimeError("could not get installed packages") from error
        return sorted(self.packages - installed)

    def show_package_info(self, package: Package) -> int:
        """Show the package manager's information on ``package``; return the exit code."""
        return self._run([*self.switches_info, str(package)])

    def get_unmanaged_packages_sorted(self) -> list[Package]:
        """Return explicitly installed packages that no group manages, sorted."""
        try:
            installed = self.get_explicitly_installed_packages()
        except Exception as error:
            raise RuntimeError("could not get explicitly installed packages") from error
        return sorted(installed - self.packages)