"""Packages to act on, collected per backend."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from pacdef.backend.base import Backend
from pacdef.grouping.package import Package


class ToDoPerBackend:
    """Backends paired with the packages that are missing or unmanaged for each."""

    def __init__(self, items: Iterable[tuple[Backend, Iterable[Package]]] = ()) -> None:
        self._items: list[tuple[Backend, list[Package]]] = [
            (backend, list(packages)) for backend, packages in items
        ]

    def push(self, backend: Backend, packages: Iterable[Package]) -> None:
        """Add the packages to act on for ``backend``."""
        self._items.append((backend, list(packages)))

    def __iter__(self) -> Iterator[tuple[Backend, list[Package]]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ToDoPerBackend({self._items!r})"

    def nothing_to_do_for_all_backends(self) -> bool:
        """Tell whether no backend has any package to act on."""
        return all(not packages for _, packages in self._items)

    def install_missing_packages(self, noconfirm: bool) -> None:
        """Install the packages of every backend.

        Raises RuntimeError if a package manager fails.
        """
        self._run_for_each(
            lambda backend, packages: backend.install_packages(packages, noconfirm),
            "install",
            "installing",
        )

    def remove_unmanaged_packages(self, noconfirm: bool) -> None:
        """Remove the packages of every backend.

        Raises RuntimeError if a package manager fails.
        """
        self._run_for_each(
            lambda backend, packages: backend.remove_packages(packages, noconfirm),
            "remove",
            "removing",
        )

    def _run_for_each(
        self,
        operation: Callable[[Backend, list[Package]], int],
        verb: str,
        verb_continuous: str,
    ) -> None:
        for backend, packages in self._items:
            if not packages:
                continue
            try:
                code = operation(backend, packages)
            except Exception as error:
                raise RuntimeError(
                    f"{verb_continuous} packages for {backend.section}"
                ) from error
            if code < 0:
                raise RuntimeError(f"could not {verb} packages for {backend.section}")
            if code != 0:
                raise RuntimeError(f"command returned with exit code {code}")

    def render(self) -> str:
        """Return each non-empty backend's section header and packages, blank-line separated."""
        parts = [
            "\n".join([f"[{backend.section}]", *(str(package) for package in packages)])
            for backend, packages in self._items
            if packages
        ]
        return "\n\n".join(parts)

    def show(self) -> None:
        """Print the packages per backend."""
        print(self.render())