from __future__ import annotations

import logging
import sys
import typing as t

from slapx.application import Application
from slapx.arguments import parse_arguments
from slapx.dispatcher import dispatch, get_exit_code, report_outcome
from slapx.util.logging import configure_logging

logger = logging.getLogger(__name__)


def run(argv: t.Sequence[str], app: Application | None = None) -> int:
    """Dispatches the invocation and returns the exit code for the process. The exit code is a failure until the
    dispatch produced an outcome."""

    exit_code = 1
    configure_logging(parse_arguments(argv).debug)

    try:
        app = app or Application()
    except OSError as exc:
        logger.error("Error: %s", exc)
        return exit_code

    outcome = dispatch(app, argv)
    report_outcome(app.io, outcome)
    exit_code = get_exit_code(outcome)
    return exit_code


def main(argv: t.Sequence[str] | None = None) -> t.NoReturn:
    sys.exit(run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
