"""Declarative package management across several Linux package managers."""

__version__ = "1.0.0"