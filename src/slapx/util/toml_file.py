""" Represents a TOML configuration file that is loaded lazily. """

from __future__ import annotations

import typing as t
from pathlib import Path

T = t.TypeVar("T")


class TomlFile:
    """A read-only view on a TOML file. The file is parsed on first access and the result is cached."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._data: dict[str, t.Any] | None = None

    def __repr__(self) -> str:
        return f'TomlFile(path="{self.path}")'

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> dict[str, t.Any]:
        import tomli

        if self._data is None:
            with self._path.open("rb") as fp:
                self._data = tomli.load(fp)
        return self._data

    def value(self) -> dict[str, t.Any]:
        return self.load()

    def value_or(self, default: T) -> dict[str, t.Any] | T:
        if self._data is not None:
            return self._data
        if self.exists():
            return self.load()
        return default

    @property
    def path(self) -> Path:
        return self._path
