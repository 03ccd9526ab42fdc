"""A section of a group file, listing the packages for one backend."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from pacdef.grouping.package import Package


def _is_header(line: str) -> bool:
    return line.startswith("[")


def split_sections(lines: Iterable[str]) -> Iterator[list[str]]:
    """Split the lines of a group file into blocks, one per section.

    Lines before the first header belong to the first block.
    """
    block: list[str] = []
    seen_header = False
    for line in lines:
        if _is_header(line):
            if seen_header:
                yield block
                block = []
            seen_header = True
        block.append(line)
    if block:
        yield block


@dataclass(eq=False)
class Section:
    """A named section and the packages listed under it."""

    name: str
    packages: set[Package] = field(default_factory=set)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Section:
        """Parse the first section found in ``lines``.

        Raises ValueError if there is no header or the section has no packages.
        """
        iterator = iter(lines)
        for line in iterator:
            if _is_header(line):
                header = line
                break
        else:
            raise ValueError("finding beginning of next section")

        name = header.strip().lstrip("[").rstrip("]")
        packages: set[Package] = set()
        for line in iterator:
            if _is_header(line):
                break
            package = Package.parse(line)
            if package is not None:
                packages.add(package)

        if not packages:
            raise ValueError(f"[{name}] is empty")
        return cls(name, packages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: Section) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self.name < other.name

    def __str__(self) -> str:
        body = "\n".join(str(package) for package in sorted(self.packages))
        return f"[{self.name}]\n{body}"