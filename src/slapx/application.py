""" The application object bundles everything that a single invocation of `slapx` works with: the directory it was
invoked from, the project and repository governing that directory, the console IO and the process executor. """

from __future__ import annotations

import logging
import os
import typing as t
from pathlib import Path

from slapx import __version__
from slapx.executor import EnvironmentPathOptions, ProcessExecutor
from slapx.util.cleo import IO, create_io, get_console_width

if t.TYPE_CHECKING:
    from slapx.hooks import HookRunner
    from slapx.project import Project
    from slapx.repository import Repository
    from slapx.util.once import Once

__all__ = ["Application"]
logger = logging.getLogger(__name__)


class Application:
    """The application object is the main hub for command-line interactions. The project and repository are located
    lazily, as a call for help outside of a project must still be able to fail with a helpful message."""

    #: The project that governs #directory, or `None` if the directory is not inside a project.
    project: Once[Project | None]

    #: The repository that the project belongs to, if any.
    repository: Once[Repository | None]

    #: The runner for lifecycle hooks. Creating the runner may fail if the hook configuration is invalid.
    hook_runner: Once[HookRunner | None]

    def __init__(
        self,
        directory: Path | None = None,
        io: IO | None = None,
        environ: t.Mapping[str, str] | None = None,
        executor: ProcessExecutor | None = None,
        console_width: int | None = None,
        name: str = "slapx",
        version: str = __version__,
    ) -> None:
        from slapx.util.once import Once

        self.directory = directory or Path.cwd()
        self.io = io or create_io()
        self.environ = os.environ if environ is None else environ
        self.executor = executor or ProcessExecutor(self.environ)
        self.name = name
        self.version = version
        self._console_width = console_width
        self.project = Once(self._get_project)
        self.repository = Once(self._get_repository)
        self.hook_runner = Once(self._get_hook_runner)

    def _get_project(self) -> Project | None:
        from slapx.project import find_project

        return find_project(self.directory)

    def _get_repository(self) -> Repository | None:
        from slapx.repository import find_repository

        project = self.project()
        return find_repository(project.directory if project else self.directory)

    def _get_hook_runner(self) -> HookRunner | None:
        """Creates the hook runner from the hook configuration of the repository, or the project's if the project is
        not part of a repository. Hooks run in the directory that they are configured in."""

        from slapx.hooks import load_hook_runner

        owner = self.repository() or self.project()
        if owner is None:
            return None

        return load_hook_runner(
            owner.hooks_config(),
            owner.directory,
            self.get_init_directory(),
            self.executor,
            EnvironmentPathOptions(repository_bin=owner.get_bin_directory()),
        )

    @property
    def console_width(self) -> int:
        return self._console_width or get_console_width()

    def get_init_directory(self) -> Path:
        """Returns the directory that child processes are told they originated from. This is the repository
        directory, if there is one, otherwise the project directory."""

        repository = self.repository()
        if repository is not None:
            return repository.directory
        project = self.project()
        return project.directory if project is not None else self.directory
