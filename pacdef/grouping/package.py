"""A single package entry of a group file."""

from __future__ import annotations

from dataclasses import dataclass


def remove_comment_and_trim_whitespace(s: str) -> str:
    """Drop everything after the first '#' and strip surrounding whitespace."""
    return s.split("#", 1)[0].strip()


def split_into_name_and_repo(string: str) -> tuple[str, str | None]:
    """Split ``repo/name`` into the name and, if present, the repository."""
    parts = string.split("/")
    name = parts[-1]
    repo = parts[-2] if len(parts) > 1 else None
    return name, repo


@dataclass(frozen=True, eq=False)
class Package:
    """A package name, optionally with the repository it comes from.

    Two packages are equal when their names match and, if both name a
    repository, their repositories match too.
    """

    name: str
    repo: str | None = None

    @classmethod
    def parse(cls, line: str) -> Package | None:
        """Parse a line of a group file; return None if nothing is left after trimming."""
        trimmed = remove_comment_and_trim_whitespace(line)
        if not trimmed:
            return None
        name, repo = split_into_name_and_repo(trimmed)
        return cls(name, repo)

    @classmethod
    def from_string(cls, value: str) -> Package:
        """Build a package from a string that must not be empty after trimming."""
        package = cls.parse(value)
        if package is None:
            raise ValueError("empty package names are not allowed")
        return package

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        repos_match = self.repo is None or other.repo is None or self.repo == other.repo
        return self.name == other.name and repos_match

    def __hash__(self) -> int:
        return hash(self.name)

    def _sort_key(self) -> tuple[str, bool, str]:
        return (self.name, self.repo is not None, self.repo or "")

    def __lt__(self, other: Package) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: Package) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: Package) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: Package) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        if self.repo is None:
            return self.name
        return f"{self.repo}/{self.name}"