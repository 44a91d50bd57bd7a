""" Quoting of arguments that are appended to a script body before it is handed to the shell. A script body is run
through `/bin/sh` on POSIX systems and through `cmd.exe` on Windows, both of which need different escaping for
every argument to arrive at the invoked program as exactly one token. """

from __future__ import annotations

import os
import re
import shlex
import typing as t

import typing_extensions as te

Platform: te.TypeAlias = 'te.Literal["posix", "windows"]'

#: Arguments that contain any of these characters must be wrapped in double quotes for `cmd.exe`.
_CMD_QUOTE_CHARS = re.compile(r'[ \t\n\v"]')

#: Characters that `cmd.exe` interprets itself. They are escaped with a caret.
_CMD_META_CHARS = re.compile(r'[ !%^&()<>|"]')


def get_platform() -> Platform:
    return "windows" if os.name == "nt" else "posix"


def escape_shell_argument(arg: str, platform: Platform | None = None) -> str:
    """Escapes a single argument so that the shell of the *platform* (defaults to the current platform) passes it
    to the invoked program unchanged."""

    if (platform or get_platform()) == "windows":
        return _escape_cmd_argument(arg)
    return shlex.quote(arg)


def join_shell_arguments(args: t.Iterable[str], platform: Platform | None = None) -> str:
    """Escapes every argument with #escape_shell_argument() and joins them with spaces."""

    return " ".join(escape_shell_argument(arg, platform) for arg in args)


def join_display_arguments(args: t.Iterable[str]) -> str:
    """Joins the arguments for display to the user. The result must never be executed."""

    return " ".join(args)


def _escape_cmd_argument(arg: str) -> str:
    # Quoting follows the rules of the Microsoft C runtime's argument parser: backslashes are only special when
    # they precede a double quote.
    if not arg:
        return '""'

    if _CMD_QUOTE_CHARS.search(arg):
        result = ['"']
        backslashes = 0
        for char in arg:
            if char == "\\":
                backslashes += 1
                continue
            if char == '"':
                result.append("\\" * (backslashes * 2 + 1))
            else:
                result.append("\\" * backslashes)
            result.append(char)
            backslashes = 0
        result.append("\\" * (backslashes * 2))
        result.append('"')
        quoted = "".join(result)
    else:
        quoted = arg

    return _CMD_META_CHARS.sub(r"^\g<0>", quoted)
