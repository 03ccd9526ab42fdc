"""Errors reported by pacdef."""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike


class PacdefError(Exception):
    """Base class for all errors that pacdef reports to the user."""


class NoPackagesFound(PacdefError):
    """A package search yielded no results."""

    def __init__(self) -> None:
        super().__init__("no packages matching query")


class ConfigFileNotFound(PacdefError):
    """The config file does not exist."""

    def __init__(self) -> None:
        super().__init__("config file not found")


class GroupFileNotFound(PacdefError):
    """No group with the given name exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"group file '{name}' not found")


class GroupAlreadyExists(PacdefError):
    """A group file that should be created already exists."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"group file '{path}' already exists")


class InvalidGroupName(PacdefError):
    """A group name resolves to a directory ('.' or '..')."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"group name '{name}' is not valid")


class MultipleGroupsNotFound(PacdefError):
    """Several requested groups do not exist."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = list(names)
        listing = "\n".join(f"  {name}" for name in self.names)
        super().__init__(f"could not find the following groups:\n{listing}")