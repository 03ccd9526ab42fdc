"""Searching the packages of all groups by regular expression."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable

from pacdef.errors import NoPackagesFound
from pacdef.grouping.group import Group
from pacdef.grouping.package import Package
from pacdef.grouping.section import Section

Match = tuple[Group, Section, Package]


def find_matches(regex: str, groups: Iterable[Group]) -> list[Match]:
    """Return every (group, section, package) whose package name matches ``regex``.

    The result is sorted by group, section and package. Raises re.error for an
    invalid expression.
    """
    pattern = re.compile(regex)
    matches = [
        (group, section, package)
        for group in groups
        for section in group.sections
        for package in section.packages
        if pattern.search(package.name)
    ]
    matches.sort(key=lambda match: (match[0].name, match[1].name, match[2]))
    return matches


def render_matches(matches: Iterable[Match]) -> str:
    """Format matches under their group and section headings."""
    matches = list(matches)
    lines: list[str] = []
    previous_group = ""
    previous_section = ""

    for index, (group, section, package) in enumerate(matches):
        if group.name != previous_group:
            lines.append(group.name)
            lines.append("-" * len(group.name))
            previous_section = ""
        if section.name != previous_section:
            lines.append(f"[{section.name}]")
        lines.append(str(package))
        previous_group = group.name
        previous_section = section.name
        if index + 1 < len(matches) and matches[index + 1][0].name != previous_group:
            lines.append("")

    return "\n".join(lines)


def search_packages(regex: str, groups: Iterable[Group]) -> None:
    """Print all packages in ``groups`` whose name matches ``regex``.

    Raises NoPackagesFound if there are no groups or nothing matches, and
    re.error for an invalid expression.
    """
    groups = list(groups)
    if not groups:
        print("WARNING: no group files found", file=sys.stderr)
        raise NoPackagesFound()

    matches = find_matches(regex, groups)
    if not matches:
        raise NoPackagesFound()

    print(render_matches(matches))