""" Runs script bodies as child processes through the shell. """

from __future__ import annotations

import dataclasses
import logging
import os
import subprocess as sp
import typing as t
from pathlib import Path

from slapx.util.cleo import escape

logger = logging.getLogger(__name__)

#: Set to `1` in the environment of every child process. A nested `slapx` invocation uses it to skip lifecycle hooks.
RECURSIVE_CALL_VARIABLE = "SLAPX_RECURSIVE_CALL"

#: Tells tools following package manager conventions which directory the invocation originated from.
INIT_DIRECTORY_VARIABLE = "INIT_CWD"


@dataclasses.dataclass
class EnvironmentPathOptions:
    """Directories to prepend to the `PATH` of a child process. The directories do not need to exist."""

    #: The executable directory of the project's virtual environment.
    project_bin: Path | None = None

    #: The executable directory of the repository's virtual environment.
    repository_bin: Path | None = None

    def get_path_folders(self) -> list[Path]:
        return [path for path in (self.project_bin, self.repository_bin) if path is not None]


def _get_path_key(environ: t.Mapping[str, str]) -> str:
    # Windows environments may spell the variable "Path".
    for key in environ:
        if key.upper() == "PATH":
            return key
    return "PATH"


def build_environment(
    base: t.Mapping[str, str],
    init_directory: Path,
    path_options: EnvironmentPathOptions | None = None,
) -> dict[str, str]:
    """Returns a copy of the *base* environment for a child process with the directories of the *path_options*
    prepended to the `PATH`, the #INIT_DIRECTORY_VARIABLE and the #RECURSIVE_CALL_VARIABLE set."""

    environ = dict(base)
    folders = [str(path) for path in (path_options or EnvironmentPathOptions()).get_path_folders()]
    if folders:
        path_key = _get_path_key(environ)
        if environ.get(path_key):
            folders.append(environ[path_key])
        environ[path_key] = os.pathsep.join(folders)
    environ[INIT_DIRECTORY_VARIABLE] = str(init_directory)
    environ[RECURSIVE_CALL_VARIABLE] = "1"
    return environ


class ProcessExecutor:
    """Runs command lines with the system shell (`/bin/sh` on POSIX, `cmd.exe` on Windows), thus the command line
    may use pipes, `&&` or environment variable expansion."""

    def __init__(self, environ: t.Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def execute(
        self,
        command_line: str,
        working_directory: Path,
        init_directory: Path,
        path_options: EnvironmentPathOptions | None = None,
        show_output: bool = True,
    ) -> int:
        """Runs the *command_line* in the *working_directory* and waits for it to finish. Returns the exit code of
        the process, which is positive if the process failed. Errors that prevent the process from being started
        (e.g. the working directory does not exist) are propagated as #OSError.

        If *show_output* is `False`, the output of the process is discarded."""

        environ = build_environment(self.environ, init_directory, path_options)
        logger.debug("Running <code>%s</code> in <val>%s</val>", escape(command_line), working_directory)

        output = None if show_output else sp.DEVNULL
        exit_code = sp.call(command_line, shell=True, cwd=working_directory, env=environ, stdout=output, stderr=output)

        if exit_code < 0:
            # Terminated by a signal, report it the same way a shell would.
            exit_code = 128 - exit_code

        logger.debug("Exit code: <val>%s</val>", exit_code)
        return exit_code
