"""What to do with the reviewed packages of one backend."""

from __future__ import annotations

from dataclasses import dataclass, field

from pacdef.backend.base import Backend
from pacdef.grouping.group import Group
from pacdef.grouping.package import Package


@dataclass
class Strategy:
    """All actions decided during a review for a single backend."""

    backend: Backend
    delete: list[Package] = field(default_factory=list)
    as_dependency: list[Package] = field(default_factory=list)
    assign_group: list[tuple[Package, Group]] = field(default_factory=list)

    def execute(self) -> None:
        """Remove, mark as dependency and assign packages, in that order.

        Raises RuntimeError if the package manager reports a failure.
        """
        section = self.backend.section
        if self.delete:
            code = self.backend.remove_packages(self.delete, False)
            if code != 0:
                raise RuntimeError(
                    f"removing packages for {section} failed with exit code {code}"
                )

        if self.as_dependency:
            code = self.backend.make_dependency(self.as_dependency)
            if code != 0:
                raise RuntimeError(
                    f"marking packages as dependency for {section} failed with exit code {code}"
                )

        if self.assign_group:
            self.backend.assign_group(self.assign_group)

    def render(self) -> str:
        """Return a description of the actions; empty if there is nothing to do."""
        if self.nothing_to_do():
            return ""

        lines = [f"[{self.backend.section}]"]
        if self.delete:
            lines.append("delete:")
            lines.extend(f"  {package}" for package in self.delete)
        if self.as_dependency:
            lines.append("as depdendency:")
            lines.extend(f"  {package}" for package in self.as_dependency)
        if self.assign_group:
            lines.append("assign groups:")
            lines.extend(f"  {package} -> {group.name}" for package, group in self.assign_group)
        return "\n".join(lines)

    def show(self) -> None:
        """Print the actions, unless there are none."""
        if self.nothing_to_do():
            return
        print(self.render())

    def nothing_to_do(self) -> bool:
        """Tell whether this strategy holds no action at all."""
        return not (self.delete or self.as_dependency or self.assign_group)