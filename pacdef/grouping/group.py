"""Group files: named collections of sections, read from the group directory."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from pacdef.grouping.package import Package
from pacdef.grouping.section import Section, split_sections
from pacdef.paths import get_relative_path


def _walk(directory: Path) -> Iterator[Path]:
    """Yield every entry below ``directory`` depth first, following symlinks.

    A directory is yielded before its contents.
    """
    for entry in sorted(directory.iterdir()):
        yield entry
        if entry.is_dir():
            yield from _walk(entry)


@dataclass(eq=False)
class Group:
    """A group file: its name relative to the group dir, its sections and its path.

    Groups compare, hash and sort by name alone.
    """

    name: str
    sections: set[Section] = field(default_factory=set)
    path: Path = field(default_factory=Path)

    @classmethod
    def load(cls, group_dir: str | os.PathLike[str], warn_not_symlinks: bool) -> set[Group]:
        """Load every group file below ``group_dir``, following symlinks.

        The directory is created if it does not exist. If ``warn_not_symlinks``
        is true, a warning is printed for each group file that is neither a
        symlink nor inside a symlinked directory.
        """
        group_dir = Path(os.path.abspath(group_dir))
        if not group_dir.is_dir():
            group_dir.mkdir()

        result: set[Group] = set()
        symlink_dirs: list[Path] = []

        for path in _walk(group_dir):
            if path.is_dir():
                if warn_not_symlinks and path.is_symlink():
                    symlink_dirs.append(path)
                continue
            if (
                warn_not_symlinks
                and not path.is_symlink()
                and not is_child_of_any_dir(path, symlink_dirs)
            ):
                print(f"WARNING: group file {path} is not a symlink", file=sys.stderr)
            group = cls.from_file(path, group_dir)
            if group not in result:
                result.add(group)

        return result

    @classmethod
    def from_file(cls, path: str | os.PathLike[str], group_dir: str | os.PathLike[str]) -> Group:
        """Read the group at ``path``, naming it by its location below ``group_dir``.

        Sections that cannot be processed are skipped with a warning; a warning
        is also printed if the file holds no sections at all.
        """
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        name = extract_group_name(path, group_dir)

        sections: set[Section] = set()
        for block in split_sections(content.splitlines()):
            try:
                section = Section.from_lines(block)
            except ValueError as error:
                print(
                    f"WARNING: could not process a section under group '{name}': {error}",
                    file=sys.stderr,
                )
                continue
            if section not in sections:
                sections.add(section)

        if not sections:
            print(f"WARNING: no sections found in group '{name}'", file=sys.stderr)

        return cls(name, sections, path)

    def save_packages(self, section_header: str, packages: Iterable[Package]) -> None:
        """Write ``packages`` right after ``section_header`` in the group file.

        The section is appended to the file if it does not exist yet.
        """
        packages = list(packages)
        content = self.path.read_text(encoding="utf-8")
        if section_header in content:
            content = write_packages_to_existing_section(content, section_header, packages)
        else:
            content = add_new_section_with_packages(content, section_header, packages)
        self.path.write_text(content, encoding="utf-8")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: Group) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self.name < other.name

    def __str__(self) -> str:
        return "\n\n".join(str(section) for section in sorted(self.sections))


def extract_group_name(
    path: str | os.PathLike[str], group_path: str | os.PathLike[str]
) -> str:
    """Return the path of a group file relative to the group dir, joined by '/'.

    Raises ValueError if ``path`` is not below ``group_path`` or equals it.
    """
    parts = get_relative_path(path, group_path).parts
    if not parts:
        raise ValueError(f"{path} does not name a file below {group_path}")
    return "/".join(parts)


def is_child_of_any_dir(
    path: str | os.PathLike[str], dirs: Iterable[str | os.PathLike[str]]
) -> bool:
    """Tell whether ``path`` lies below any of ``dirs``; all paths should be absolute."""
    file_parts = Path(path).parts
    return any(
        all(dir_part == file_part for dir_part, file_part in zip(Path(directory).parts, file_parts))
        for directory in dirs
    )


def find_first_package_line_in_section(content: str, section_header: str) -> int:
    """Return the index of the line following ``section_header`` in ``content``.

    Raises ValueError if the header is missing or its line has no newline.
    """
    section_start = content.find(section_header)
    if section_start < 0:
        raise ValueError(f"section header {section_header} not found")
    newline = content.find("\n", section_start)
    if newline < 0:
        raise ValueError(f"line of section header {section_header} does not end in a newline")
    return newline + 1


def write_packages_to_existing_section(
    content: str, section_header: str, packages: Iterable[Package]
) -> str:
    """Return ``content`` with ``packages`` inserted right after ``section_header``."""
    index = find_first_package_line_in_section(content, section_header)
    inserted = "".join(f"{package}\n" for package in packages)
    return content[:index] + inserted + content[index:]


def add_new_section_with_packages(
    content: str, section_header: str, packages: Iterable[Package]
) -> str:
    """Return ``content`` with a new section holding ``packages`` appended."""
    lines = "".join(f"{package}\n" for package in packages)
    return f"{content}\n{section_header}\n{lines}"