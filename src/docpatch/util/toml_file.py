""" Read access to a TOML file that may or may not exist. """

from __future__ import annotations

import typing as t
from pathlib import Path

T = t.TypeVar("T")


class TomlFile:
    def __init__(self, path: Path, data: dict[str, t.Any] | None = None) -> None:
        self._path = path
        self._data = data

    def __repr__(self) -> str:
        return f'TomlFile(path="{self.path}")'

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self, force_reload: bool = False) -> dict[str, t.Any]:
        import tomli

        if self._data is None or force_reload:
            with self._path.open("rb") as fp:
                self._data = tomli.load(fp)
        return self._data

    def value_or(self, default: T) -> dict[str, t.Any] | T:
        if self._data is not None:
            return self._data
        if self.exists():
            return self.load()
        return default

    @property
    def path(self) -> Path:
        return self._path
