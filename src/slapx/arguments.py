""" Parses the command-line of `slapx`. Options are only recognized before the command name, everything that follows
the command name is passed on to the script. """

from __future__ import annotations

import dataclasses
import typing as t

HELP_FLAGS = ("-h", "--help")
QUIET_FLAGS = ("-q", "--quiet")
DEBUG_FLAGS = ("-d", "--debug")
IGNORE_HOOKS_FLAGS = ("--ignore-hooks",)


@dataclasses.dataclass(frozen=True)
class InvocationRequest:
    """The structured form of the command-line arguments."""

    #: Show the usage and the available commands. Always set if no command name was given or if unknown flags were
    #: passed.
    help: bool = False

    #: Suppress startup information.
    quiet: bool = False

    #: Run in debug mode. Shows debug log messages and the output of lifecycle hooks.
    debug: bool = False

    #: Do not run lifecycle hooks.
    ignore_hooks: bool = False

    #: The name of the command to run.
    command_name: str = ""

    #: The arguments following the command name, verbatim.
    command_args: tuple[str, ...] = ()

    #: Arguments that looked like options but were not recognized.
    unknown_flags: tuple[str, ...] = ()


def parse_arguments(argv: t.Sequence[str]) -> InvocationRequest:
    """Parses the arguments following the program name. This never fails; unknown options are collected in
    #InvocationRequest.unknown_flags and cause the help to be shown."""

    help = quiet = debug = ignore_hooks = False
    command_name = ""
    command_args: list[str] = []
    unknown_flags: list[str] = []

    for arg in argv:
        if command_name:
            command_args.append(arg)
        elif arg in HELP_FLAGS:
            help = True
        elif arg in QUIET_FLAGS:
            quiet = True
        elif arg in DEBUG_FLAGS:
            debug = True
        elif arg in IGNORE_HOOKS_FLAGS:
            ignore_hooks = True
        elif arg.startswith("-"):
            unknown_flags.append(arg)
        else:
            command_name = arg

    return InvocationRequest(
        help=help or not command_name or bool(unknown_flags),
        quiet=quiet,
        debug=debug,
        ignore_hooks=ignore_hooks,
        command_name=command_name,
        command_args=tuple(command_args),
        unknown_flags=tuple(unknown_flags),
    )
