""" The script table maps command names to the script bodies that are run for them. """

from __future__ import annotations

import logging
import types
import typing as t

logger = logging.getLogger(__name__)


def is_valid_command_name(name: str) -> bool:
    """Command names must not be empty, must not start with a dash (as they would be confused with an option) and
    must not contain whitespace."""

    return bool(name) and not name.startswith("-") and not any(char.isspace() for char in name)


class ScriptTable:
    """An immutable, ordered mapping of command names to script bodies. Entries of the configuration that could not
    be accepted as a command are remembered as #malformed_names so that they can be reported to the user."""

    def __init__(self, scripts: t.Mapping[str, str], malformed_names: t.Sequence[str] = ()) -> None:
        self._scripts = types.MappingProxyType(dict(scripts))
        self._malformed_names = tuple(malformed_names)

    def __repr__(self) -> str:
        return f"ScriptTable(commands={list(self._scripts)!r}, malformed_names={list(self._malformed_names)!r})"

    def __len__(self) -> int:
        return len(self._scripts)

    def __contains__(self, name: object) -> bool:
        return name in self._scripts

    @classmethod
    def from_config(cls, raw: t.Mapping[str, t.Any]) -> ScriptTable:
        """Creates a script table from a raw configuration table. Entries with an invalid name or with a body that is
        not a string are considered malformed."""

        scripts: dict[str, str] = {}
        malformed: list[str] = []
        for name, body in raw.items():
            if is_valid_command_name(name) and isinstance(body, str):
                scripts[name] = body
            else:
                logger.debug("Malformed script entry <subj>%s</subj>: <val>%r</val>", name, body)
                malformed.append(name)
        return cls(scripts, malformed)

    @property
    def command_names(self) -> tuple[str, ...]:
        """The names of all well-formed commands in the order that they were defined in."""

        return tuple(self._scripts)

    @property
    def malformed_names(self) -> tuple[str, ...]:
        return self._malformed_names

    def try_get_body(self, name: str) -> str | None:
        return self._scripts.get(name)

    def get_body(self, name: str) -> str:
        try:
            return self._scripts[name]
        except KeyError:
            raise KeyError(f"no command named {name!r}") from None
