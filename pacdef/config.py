"""The user's configuration, stored as YAML."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from pacdef.errors import ConfigFileNotFound


@dataclass
class Config:
    """Settings read from ``$XDG_CONFIG_HOME/pacdef/pacdef.yaml``."""

    aur_helper: str = "paru"
    aur_rm_args: list[str] = field(default_factory=list)
    flatpak_systemwide: bool = True
    warn_not_symlinks: bool = True
    disabled_backends: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, config_file: str | os.PathLike[str]) -> Config:
        """Load the config from a file.

        Raises ConfigFileNotFound if the file does not exist and ValueError if
        its content is malformed.
        """
        try:
            content = Path(config_file).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigFileNotFound() from None
        return cls._from_yaml(content)

    @classmethod
    def _from_yaml(cls, content: str) -> Config:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as error:
            raise ValueError(f"parsing yaml config: {error}") from error

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("parsing yaml config: expected a mapping")

        values: dict[str, Any] = {}
        for config_field in fields(cls):
            if config_field.name not in data:
                continue
            value = data[config_field.name]
            _check_type(config_field.name, value)
            values[config_field.name] = list(value) if isinstance(value, list) else value
        return cls(**values)

    def save(self, file: str | os.PathLike[str]) -> None:
        """Write the config to ``file``, creating its directory if needed."""
        path = Path(file)
        content = yaml.safe_dump(asdict(self), sort_keys=False, default_flow_style=False)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


_EXPECTED_TYPES = {
    "aur_helper": "string",
    "aur_rm_args": "list of strings",
    "flatpak_systemwide": "boolean",
    "warn_not_symlinks": "boolean",
    "disabled_backends": "list of strings",
}


def _check_type(name: str, value: Any) -> None:
    expected = _EXPECTED_TYPES[name]
    if expected == "string":
        valid = isinstance(value, str)
    elif expected == "boolean":
        valid = isinstance(value, bool)
    else:
        valid = isinstance(value, list) and all(isinstance(item, str) for item in value)
    if not valid:
        raise ValueError(f"parsing yaml config: '{name}' must be a {expected}")