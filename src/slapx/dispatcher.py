""" Dispatches a `slapx` invocation: parses the command-line, resolves the command against the project's script
table, runs it between the lifecycle hooks and turns whatever happened into exactly one #DispatchOutcome. """

from __future__ import annotations

import dataclasses
import json
import logging
import platform
import typing as t

import typing_extensions as te

from slapx.arguments import InvocationRequest, parse_arguments
from slapx.executor import EnvironmentPathOptions
from slapx.hooks import HookEvent, run_hook_best_effort
from slapx.util.cleo import IO, escape
from slapx.util.shell import Platform, join_display_arguments, join_shell_arguments
from slapx.util.text import pad_end, quote_names, truncate_with_ellipsis

if t.TYPE_CHECKING:
    from slapx.application import Application
    from slapx.project import Project
    from slapx.scripts import ScriptTable

logger = logging.getLogger(__name__)

NOT_IN_PROJECT_MESSAGE = (
    "This command should be used inside a project folder. Unable to find a pyproject.toml or slapx.toml file in "
    "the current working directory or any of its parents."
)


@dataclasses.dataclass(frozen=True)
class Success:
    pass


@dataclasses.dataclass(frozen=True)
class ProcessFailure:
    """The script ran but exited with a non-zero #code, which becomes the exit code of `slapx`."""

    code: int
    message: str


@dataclasses.dataclass(frozen=True)
class UsageError:
    """The invocation could not be served, e.g. because the command does not exist."""

    message: str


@dataclasses.dataclass(frozen=True)
class UnexpectedError:
    message: str
    exception: BaseException | None = dataclasses.field(default=None, compare=False)


DispatchOutcome: te.TypeAlias = "Success | ProcessFailure | UsageError | UnexpectedError"


def get_exit_code(outcome: DispatchOutcome) -> int:
    match outcome:
        case Success():
            return 0
        case ProcessFailure(code=code):
            return code
        case UsageError() | UnexpectedError():
            return 1
        case _:
            raise TypeError(f"unexpected outcome: {outcome!r}")


def report_outcome(io: IO, outcome: DispatchOutcome) -> None:
    """Prints the error message for outcomes that represent an error. A failing script has already reported its
    own problems and is not printed as an error."""

    if isinstance(outcome, (UsageError, UnexpectedError)):
        io.write_error_line(f"<error>Error: {escape(outcome.message)}</error>")


@dataclasses.dataclass(frozen=True)
class CommandLine:
    #: The command line that is passed to the shell.
    command: str

    #: The command line with the arguments unescaped. For display only.
    display: str


def compose_command_line(script_body: str, args: t.Sequence[str], platform: Platform | None = None) -> CommandLine:
    """Appends the *args* to the *script_body*, each escaped for the shell so that the script receives every
    argument as a single token."""

    if not args:
        return CommandLine(script_body, script_body)
    return CommandLine(
        script_body + " " + join_shell_arguments(args, platform),
        script_body + " " + join_display_arguments(args),
    )


def show_usage(io: IO, project: Project, table: ScriptTable, console_width: int) -> None:
    io.write_line("usage: slapx [-h]")
    io.write_line("       slapx [-q/--quiet] [-d/--debug] [--ignore-hooks] <command> ...")
    io.write_line("")
    io.write_line("Optional arguments:")
    io.write_line("  -h, --help            Show this help message and exit.")
    io.write_line("  -q, --quiet           Hide slapx startup information.")
    io.write_line("  -d, --debug           Run in debug mode.")
    io.write_line("  --ignore-hooks        Do not run the pre-run and post-run hooks.")
    io.write_line("")

    if not table.command_names:
        io.write_line("<warning>Warning: No commands are defined yet for this project.</warning>")
        io.write_line(
            'You can define a command by adding a "scripts" table to the project\'s slapx.toml file or to the '
            "[tool.slapx] section of its pyproject.toml file."
        )
    else:
        io.write_line(f"Project commands for <fg=cyan>{escape(project.name())}</fg>:")

        max_length = max(len(name) for name in table.command_names)
        # The width of the label, e.g. "  command: "
        label_length = 2 + max_length + 2
        truncate_length = max(0, console_width - label_length) - 1

        for name in table.command_names:
            label = pad_end(name + ":", max_length + 2)
            body = truncate_with_ellipsis(json.dumps(table.get_body(name), ensure_ascii=False), truncate_length)
            io.write_line(f"  <fg=cyan>{escape(label)}</fg>{escape(body)}")

    if table.malformed_names:
        io.write_line("")
        io.write_line(
            "<warning>Warning: Some entries in the scripts table have malformed names: "
            f"{escape(quote_names(table.malformed_names))}</warning>"
        )


def dispatch(app: Application, argv: t.Sequence[str]) -> DispatchOutcome:
    """Runs one `slapx` invocation for the arguments *argv* (excluding the program name). Errors never propagate
    from this function, they are returned as an outcome."""

    try:
        return _dispatch(app, parse_arguments(argv))
    except Exception as exc:
        logger.debug("Unexpected error", exc_info=True)
        return UnexpectedError(str(exc) or type(exc).__name__, exc)


def _dispatch(app: Application, request: InvocationRequest) -> DispatchOutcome:
    io = app.io

    if request.unknown_flags:
        unknown = ", ".join(json.dumps(flag) for flag in request.unknown_flags)
        io.write_error_line(f"<error>Unknown arguments: {escape(unknown)}</error>")

    project = app.project()
    if project is None:
        return UsageError(NOT_IN_PROJECT_MESSAGE)

    repository = app.repository()
    if repository is not None and not repository.contains_project(project):
        logger.warning(
            "<warning>You are invoking slapx inside the repository <subj>%s</subj>, but the project <subj>%s</subj> "
            "is not registered in it.</warning>",
            repository.directory,
            project.directory,
        )

    if not request.quiet:
        io.write_line(f"<fg=cyan>{app.name}</fg> {app.version} (Python {platform.python_version()})")

    table = project.scripts()
    if request.help:
        show_usage(io, project, table, app.console_width)
        return Success()

    script_body = table.try_get_body(request.command_name)
    if script_body is None:
        message = f'The command "{request.command_name}" is not defined for this project.'
        if table.command_names:
            message += "\nAvailable commands for this project are: " + quote_names(table.command_names)
        return UsageError(message)

    command_line = compose_command_line(script_body, request.command_args)
    if not request.quiet:
        io.write_line(f"> {escape(command_line.display)}")
        io.write_line("")

    run_hook_best_effort(app.hook_runner, HookEvent.PRE, request, app.environ)

    exit_code = app.executor.execute(
        command_line.command,
        project.directory,
        app.get_init_directory(),
        EnvironmentPathOptions(project_bin=project.get_bin_directory()),
    )

    run_hook_best_effort(app.hook_runner, HookEvent.POST, request, app.environ)

    if exit_code > 0:
        logger.warning("Command <code>%s</code> exited with code <val>%s</val>", escape(command_line.display), exit_code)
        return ProcessFailure(exit_code, f"Failed calling {command_line.display}. Exit code: {exit_code}")

    return Success()
