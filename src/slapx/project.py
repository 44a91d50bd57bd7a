from __future__ import annotations

import logging
import typing as t
from pathlib import Path

from slapx.configuration import Configuration

if t.TYPE_CHECKING:
    from slapx.scripts import ScriptTable
    from slapx.util.once import Once

logger = logging.getLogger(__name__)

#: Files that mark a directory as a project directory.
PROJECT_MARKERS = ("pyproject.toml", "slapx.toml")


class Project(Configuration):
    """Represents the Python project whose scripts can be run. The scripts are read from the `scripts` table of the
    project's configuration, i.e. from `slapx.toml` or the `[tool.slapx.scripts]` section in `pyproject.toml`."""

    #: The script table of the project, accessible as a #Once.
    scripts: Once[ScriptTable]

    #: The name of the project, accessible as a #Once.
    name: Once[str]

    def __init__(self, directory: Path) -> None:
        super().__init__(directory)
        from slapx.util.once import Once

        self.scripts = Once(self._get_script_table)
        self.name = Once(self._get_name)

    def _get_script_table(self) -> ScriptTable:
        from slapx.scripts import ScriptTable

        scripts = self.raw_config().get("scripts", {})
        if not isinstance(scripts, dict):
            raise ValueError(f"expected a table for the `scripts` option of {self!r}, got {type(scripts).__name__}")
        return ScriptTable.from_config(scripts)

    def _get_name(self) -> str:
        """Returns the distribution name from `pyproject.toml` (either the standard `[project]` section or the
        `[tool.poetry]` section), falling back to the name of the project directory."""

        pyproject = self.pyproject_toml.value_or({})
        name = pyproject.get("project", {}).get("name") or pyproject.get("tool", {}).get("poetry", {}).get("name")
        if isinstance(name, str) and name:
            return name
        return self.directory.resolve().name


def find_project(directory: Path) -> Project | None:
    """Finds the project that governs the given *directory*. This is the closest directory, starting with *directory*
    itself, that contains a `pyproject.toml` or `slapx.toml` file. Returns `None` if there is no such directory."""

    directory = directory.resolve()
    for path in (directory, *directory.parents):
        if any((path / marker).is_file() for marker in PROJECT_MARKERS):
            logger.debug("Found project in <val>%s</val>", path)
            return Project(path)
    return None
