import logging

from slapx.util.logging import TerminalColorFormatter


def _record(message: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.WARNING, __file__, 1, message, args, None)


def test__TerminalColorFormatter__strips_tags_when_not_decorated():
    formatter = TerminalColorFormatter("%(levelname)s %(message)s", decorated=False)
    record = _record("Running <subj>%s</subj> in <val>%s</val>", "build", "/tmp")
    assert formatter.format(record) == "WARNING Running build in /tmp"


def test__TerminalColorFormatter__colors_tags_when_decorated():
    formatter = TerminalColorFormatter("%(message)s", decorated=True)
    formatted = formatter.format(_record("<subj>build</subj>"))
    assert "\033[" in formatted
    assert "build" in formatted
    assert "<subj>" not in formatted
