from pathlib import Path

import pytest
import tomli

from slapx.util.toml_file import TomlFile


def test__TomlFile__value_is_cached(tmp_path: Path):
    path = tmp_path / "slapx.toml"
    path.write_text('[scripts]\nbuild = "echo hi"\n')
    toml_file = TomlFile(path)
    assert toml_file.exists()
    assert toml_file.value() == {"scripts": {"build": "echo hi"}}

    path.write_text('[scripts]\nbuild = "echo bye"\n')
    assert toml_file.value() == {"scripts": {"build": "echo hi"}}


def test__TomlFile__value_or_for_missing_file(tmp_path: Path):
    toml_file = TomlFile(tmp_path / "pyproject.toml")
    assert not toml_file.exists()
    assert toml_file.value_or({}) == {}
    with pytest.raises(FileNotFoundError):
        toml_file.value()


def test__TomlFile__raises_for_invalid_toml(tmp_path: Path):
    path = tmp_path / "slapx.toml"
    path.write_text("scripts = [")
    with pytest.raises(tomli.TOMLDecodeError):
        TomlFile(path).value()
