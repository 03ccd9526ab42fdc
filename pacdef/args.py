"""Command-line arguments."""

from __future__ import annotations

import argparse
import enum
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


class GroupAction(enum.Enum):
    """Subcommands of ``pacdef group``."""

    EDIT = "edit"
    IMPORT = "import"
    LIST = "list"
    NEW = "new"
    REMOVE = "remove"
    SHOW = "show"


class PackageAction(enum.Enum):
    """Subcommands of ``pacdef package``."""

    CLEAN = "clean"
    REVIEW = "review"
    SEARCH = "search"
    SYNC = "sync"
    UNMANAGED = "unmanaged"


@dataclass(frozen=True)
class GroupCommand:
    """A ``pacdef group`` invocation."""

    action: GroupAction
    groups: tuple[str, ...] = ()
    edit: bool = False


@dataclass(frozen=True)
class PackageCommand:
    """A ``pacdef package`` invocation."""

    action: PackageAction
    noconfirm: bool = False
    regex: str | None = None


@dataclass(frozen=True)
class VersionCommand:
    """A ``pacdef version`` invocation."""


Command = GroupCommand | PackageCommand | VersionCommand


@lru_cache(maxsize=None)
def _git_hash() -> str:
    checkout = Path(__file__).resolve().parent.parent
    if not (checkout / ".git").exists():
        return ""
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=checkout,
            capture_output=True,
            check=False,
        )
    except OSError:
        return ""
    if completed.returncode != 0:
        return ""
    return completed.stdout.decode("utf-8", errors="replace").strip()


def get_version_string() -> str:
    """Return ``<version>``, or ``<version> (<hash>)`` when run from a git checkout."""
    try:
        package_version = version("pacdef")
    except PackageNotFoundError:
        package_version = "unknown"
    git_hash = _git_hash()
    return f"{package_version} ({git_hash})" if git_hash else package_version


def _add_groups_argument(parser: argparse.ArgumentParser, help_text: str | None) -> None:
    parser.add_argument("groups", nargs="+", help=help_text)


def _add_noconfirm_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--noconfirm", action="store_true", help="do not ask for any confirmation"
    )


def _build_group_parser(subparsers: argparse._SubParsersAction) -> None:
    group = subparsers.add_parser("group", aliases=["g"], help="manage groups")
    actions = group.add_subparsers(dest="group_action", required=True, metavar="subcommand")

    def groups_command(action: GroupAction):
        return lambda ns: GroupCommand(action, tuple(ns.groups))

    edit = actions.add_parser("edit", aliases=["e"], help="edit one or more existing group")
    _add_groups_argument(edit, "a previously imported group")
    edit.set_defaults(make=groups_command(GroupAction.EDIT))

    imp = actions.add_parser("import", aliases=["i"], help="import one or more group files")
    _add_groups_argument(imp, "the file to import as group")
    imp.set_defaults(make=groups_command(GroupAction.IMPORT))

    listing = actions.add_parser("list", aliases=["l"], help="list names of imported groups")
    listing.set_defaults(make=lambda ns: GroupCommand(GroupAction.LIST))

    new = actions.add_parser("new", aliases=["n"], help="create new group files")
    new.add_argument(
        "-e", "--edit", action="store_true", help="edit the new group files after creation"
    )
    _add_groups_argument(new, None)
    new.set_defaults(make=lambda ns: GroupCommand(GroupAction.NEW, tuple(ns.groups), ns.edit))

    remove = actions.add_parser(
        "remove", aliases=["r"], help="remove one or more previously imported groups"
    )
    _add_groups_argument(remove, "a previously imported group that will be removed")
    remove.set_defaults(make=groups_command(GroupAction.REMOVE))

    show = actions.add_parser("show", aliases=["s"], help="show packages under an imported group")
    _add_groups_argument(show, "group file(s) to show")
    show.set_defaults(make=groups_command(GroupAction.SHOW))


def _build_package_parser(subparsers: argparse._SubParsersAction) -> None:
    package = subparsers.add_parser("package", aliases=["p"], help="manage packages")
    actions = package.add_subparsers(dest="package_action", required=True, metavar="subcommand")

    clean = actions.add_parser("clean", aliases=["c"], help="remove unmanaged packages")
    _add_noconfirm_argument(clean)
    clean.set_defaults(make=lambda ns: PackageCommand(PackageAction.CLEAN, ns.noconfirm))

    review = actions.add_parser("review", aliases=["r"], help="review unmanaged packages")
    review.set_defaults(make=lambda ns: PackageCommand(PackageAction.REVIEW))

    search = actions.add_parser(
        "search", aliases=["se"], help="search for packages which match a provided regex"
    )
    search.add_argument("regex", help="the regular expression the package must match")
    search.set_defaults(make=lambda ns: PackageCommand(PackageAction.SEARCH, regex=ns.regex))

    sync = actions.add_parser(
        "sync", aliases=["sy"], help="install packages from all imported groups"
    )
    _add_noconfirm_argument(sync)
    sync.set_defaults(make=lambda ns: PackageCommand(PackageAction.SYNC, ns.noconfirm))

    unmanaged = actions.add_parser(
        "unmanaged",
        aliases=["u"],
        help="show explicitly installed packages not managed by pacdef",
    )
    unmanaged.set_defaults(make=lambda ns: PackageCommand(PackageAction.UNMANAGED))


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for pacdef's command line."""
    parser = argparse.ArgumentParser(
        prog="pacdef",
        description="multi-backend declarative package manager for Linux",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="subcommand")
    _build_group_parser(subparsers)
    _build_package_parser(subparsers)
    version_parser = subparsers.add_parser("version", help="show version info")
    version_parser.set_defaults(make=lambda ns: VersionCommand())
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Command:
    """Parse the command line into a command; exits with usage on invalid input."""
    namespace = build_parser().parse_args(argv)
    return namespace.make(namespace)