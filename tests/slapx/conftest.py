from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from cleo.io.buffered_io import BufferedIO  # type: ignore[import]

from slapx.executor import EnvironmentPathOptions, ProcessExecutor
from slapx.util.cleo import add_default_styles


@dataclasses.dataclass
class ExecutorCall:
    command_line: str
    working_directory: Path
    init_directory: Path
    path_options: EnvironmentPathOptions | None
    show_output: bool


class RecordingExecutor(ProcessExecutor):
    """Records the command lines instead of running them. Exit codes are looked up in #exit_codes by command line,
    and if the value is an exception, it is raised instead."""

    def __init__(self, exit_codes: dict[str, int | Exception] | None = None) -> None:
        super().__init__({})
        self.exit_codes = exit_codes or {}
        self.calls: list[ExecutorCall] = []

    @property
    def command_lines(self) -> list[str]:
        return [call.command_line for call in self.calls]

    def execute(
        self,
        command_line: str,
        working_directory: Path,
        init_directory: Path,
        path_options: EnvironmentPathOptions | None = None,
        show_output: bool = True,
    ) -> int:
        self.calls.append(ExecutorCall(command_line, working_directory, init_directory, path_options, show_output))
        result = self.exit_codes.get(command_line, 0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def io() -> BufferedIO:
    io = BufferedIO()
    add_default_styles(io)
    return io

