"""The set of backends pacdef knows about."""

from __future__ import annotations

from collections.abc import Iterator

from pacdef.backend.arch import Arch
from pacdef.backend.base import Backend
from pacdef.backend.debian import Debian
from pacdef.backend.flatpak import Flatpak
from pacdef.backend.python import Python
from pacdef.backend.rust import Rust

BACKEND_TYPES: tuple[type[Backend], ...] = (Arch, Debian, Flatpak, Python, Rust)


def iter_backends() -> Iterator[Backend]:
    """Yield a fresh instance of every backend, in registration order."""
    for backend_type in BACKEND_TYPES:
        yield backend_type()


def included_sections() -> list[str]:
    """Return the section names of all backends, sorted."""
    return sorted(backend_type.section for backend_type in BACKEND_TYPES)