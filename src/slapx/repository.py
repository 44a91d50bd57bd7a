from __future__ import annotations

import dataclasses
import logging
import typing as t
from pathlib import Path

from databind.core.settings import ExtraKeys

from slapx.configuration import Configuration
from slapx.util.once import Once

if t.TYPE_CHECKING:
    from slapx.project import Project

logger = logging.getLogger(__name__)


@dataclasses.dataclass
@ExtraKeys(True)
class RepositoryConfig:
    #: A list of paths (relative to the repository directory) that point to the projects of the repository. Glob
    #: patterns are allowed. If this option is not set, every project below the repository directory is considered
    #: to be part of the repository.
    projects: list[str] | None = None


class Repository(Configuration):
    """A repository is a directory that contains one or more projects and that shares lifecycle hooks between them.
    A directory is a repository if its configuration has a `[repository]` table (or `[tool.slapx.repository]` in
    the case of a `pyproject.toml`)."""

    config: Once[RepositoryConfig]

    #: The resolved directories of the #RepositoryConfig.projects option, or `None` if the option is not set.
    project_directories: Once[list[Path] | None]

    def __init__(self, directory: Path) -> None:
        super().__init__(directory)
        self.config = Once(self._get_repository_configuration)
        self.project_directories = Once(self._get_project_directories)

    @staticmethod
    def is_repository(configuration: Configuration) -> bool:
        return isinstance(configuration.raw_config().get("repository"), dict)

    def _get_repository_configuration(self) -> RepositoryConfig:
        from databind.json import load

        return load(self.raw_config().get("repository", {}), RepositoryConfig, settings=[ExtraKeys(True)])

    def _get_project_directories(self) -> list[Path] | None:
        """Resolves the #RepositoryConfig.projects option into a list of directories."""

        patterns = self.config().projects
        if patterns is None:
            return None

        directories: list[Path] = []
        for pattern in patterns:
            if any(char in pattern for char in "*?["):
                matches = sorted(self.directory.glob(pattern))
            else:
                matches = [self.directory / pattern]
            directories += [path.resolve() for path in matches if path.is_dir()]

        return directories

    def contains_project(self, project: Project) -> bool:
        """Returns `True` if the *project* is registered in this repository."""

        directories = self.project_directories()
        if directories is None:
            return True
        return project.directory.resolve() in directories


def find_repository(directory: Path) -> Repository | None:
    """Finds the repository that the given *directory* belongs to. This will search for the closest directory,
    starting with *directory* itself, whose configuration contains a `repository` table."""

    directory = directory.resolve()
    for path in (directory, *directory.parents):
        configuration = Configuration(path)
        if configuration.has_configuration_file() and Repository.is_repository(configuration):
            logger.debug("Found repository in <val>%s</val>", path)
            return Repository(path)
    return None
