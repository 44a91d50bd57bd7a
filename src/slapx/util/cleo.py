""" Helpers for the parts of Cleo that we use for console output. """

from __future__ import annotations

import sys
import typing as t

from cleo.formatters.formatter import Formatter  # type: ignore[import]
from cleo.formatters.style import Style  # type: ignore[import]
from cleo.io.inputs.string_input import StringInput  # type: ignore[import]
from cleo.io.io import IO  # type: ignore[import]
from cleo.io.outputs.stream_output import StreamOutput  # type: ignore[import]
from cleo.terminal import Terminal  # type: ignore[import]

__all__ = ["IO", "DEFAULT_CONSOLE_WIDTH", "add_style", "add_default_styles", "create_io", "escape", "get_console_width"]

DEFAULT_CONSOLE_WIDTH = 80

#: Styles available in all output written through an #IO created with #create_io().
DEFAULT_STYLES: dict[str, tuple[str | None, str | None, list[str] | None]] = {
    "subj": ("blue", None, None),
    "obj": ("yellow", None, None),
    "val": ("cyan", None, None),
    "warning": ("yellow", None, None),
    "error": ("red", None, None),
    "code": ("cyan", None, None),
    "opt": ("cyan", None, ["italic"]),
}


def add_style(
    io: IO | Formatter,
    name: str,
    foreground: str | None = None,
    background: str | None = None,
    options: list[str] | None = None,
) -> None:
    """
    Add a style to a Cleo IO (both the standard and error output) or a Formatter instance.
    """

    style = Style(foreground, background, options)
    if isinstance(io, IO):
        io.output.formatter.set_style(name, style)
        io.error_output.formatter.set_style(name, style)
    elif isinstance(io, Formatter):
        io.set_style(name, style)
    else:
        raise TypeError(f"expected IO|Formatter, got {type(io).__name__}")


def add_default_styles(io: IO | Formatter) -> None:
    for name, (fg, bg, options) in DEFAULT_STYLES.items():
        add_style(io, name, fg, bg, options)


def create_io(stdout: t.TextIO | None = None, stderr: t.TextIO | None = None) -> IO:
    """Create an IO object that writes to the given streams (defaulting to the standard output and error streams).
    Output is decorated with colors only if the stream is a terminal."""

    io = IO(StringInput(""), StreamOutput(stdout or sys.stdout), StreamOutput(stderr or sys.stderr))
    add_default_styles(io)
    return io


def escape(text: str) -> str:
    """Escape *text* such that Cleo does not interpret any of its contents as style tags."""

    return Formatter.escape(text)


def get_console_width() -> int:
    return Terminal().width or DEFAULT_CONSOLE_WIDTH
