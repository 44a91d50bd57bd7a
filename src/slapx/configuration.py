from __future__ import annotations

import logging
import os
import typing as t
from pathlib import Path

from slapx.util.toml_file import TomlFile

if t.TYPE_CHECKING:
    from slapx.hooks import HooksConfig
    from slapx.util.once import Once

logger = logging.getLogger(__name__)

#: The virtual environment directory that is assumed if the configuration does not specify one.
DEFAULT_VENV_DIRECTORY = ".venv"


class Configuration:
    """Represents the configuration stored in a directory, which is either read from `slapx.toml` or the
    `[tool.slapx]` section of `pyproject.toml`."""

    #: The directory that the configuration belongs to. This is the directory where the `slapx.toml` or
    #: `pyproject.toml` configuration would usually reside in, but the existence of neither is absolutely required.
    directory: Path

    #: Points to the `pyproject.toml` file in the directory and can be used to conveniently check for its existence
    #: or to access its contents.
    pyproject_toml: TomlFile

    #: Points to the `slapx.toml` file in the directory and can be used to conveniently check for its existence
    #: or to access its contents.
    slapx_toml: TomlFile

    #: The raw Slapx configuration, automatically loaded from either `slapx.toml` or the `tool.slapx` section in
    #: `pyproject.toml`. The attribute is a #Once instance, thus it needs to be called to retrieve the contents.
    raw_config: Once[dict[str, t.Any]]

    #: The hook configuration from the `hooks` table of the raw configuration.
    hooks_config: Once[HooksConfig]

    def __init__(self, directory: Path) -> None:
        from slapx.util.once import Once

        self.directory = directory
        self.pyproject_toml = TomlFile(directory / "pyproject.toml")
        self.slapx_toml = TomlFile(directory / "slapx.toml")
        self.raw_config = Once(self.get_raw_configuration)
        self.hooks_config = Once(self._get_hooks_configuration)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(directory="{self.directory}")'

    def has_configuration_file(self) -> bool:
        return self.slapx_toml.exists() or self.pyproject_toml.exists()

    def get_raw_configuration(self) -> dict[str, t.Any]:
        """Loads the raw configuration data for Slapx from either the `slapx.toml` configuration file or
        `pyproject.toml` under the `[tool.slapx]` section. If neither of the files exist or the section in the
        pyproject does not exist, an empty dictionary will be returned."""

        if self.slapx_toml.exists():
            logger.debug("Reading configuration for <subj>%s</subj> from <val>%s</val>", self, self.slapx_toml.path)
            return self.slapx_toml.value()
        if self.pyproject_toml.exists():
            logger.debug("Reading configuration for <subj>%s</subj> from <val>%s</val>", self, self.pyproject_toml.path)
            return self.pyproject_toml.value().get("tool", {}).get("slapx", {})
        return {}

    def _get_hooks_configuration(self) -> HooksConfig:
        from databind.core.settings import ExtraKeys
        from databind.json import load

        from slapx.hooks import HooksConfig

        return load(self.raw_config().get("hooks", {}), HooksConfig, settings=[ExtraKeys(True)])

    def get_bin_directory(self) -> Path:
        """Returns the directory that contains the executables of the virtual environment configured with the `venv`
        option (defaults to `.venv`). The directory does not need to exist."""

        venv = self.raw_config().get("venv", DEFAULT_VENV_DIRECTORY)
        if not isinstance(venv, str):
            raise ValueError(f"expected a string for the `venv` option of {self!r}, got {type(venv).__name__}")
        return self.directory / venv / ("Scripts" if os.name == "nt" else "bin")
