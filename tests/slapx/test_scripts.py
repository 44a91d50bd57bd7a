import pytest

from slapx.scripts import ScriptTable, is_valid_command_name


def test__is_valid_command_name():
    assert is_valid_command_name("build")
    assert is_valid_command_name("build:watch")
    assert not is_valid_command_name("")
    assert not is_valid_command_name("-build")
    assert not is_valid_command_name("build all")


def test__ScriptTable__from_config__keeps_order_and_collects_malformed_names():
    table = ScriptTable.from_config(
        {
            "test": "pytest",
            "-bad": "echo",
            "build": "python -m build",
            "not a name": "echo",
            "number": 42,
            "lint": "flake8",
        }
    )
    assert table.command_names == ("test", "build", "lint")
    assert table.malformed_names == ("-bad", "not a name", "number")
    assert len(table) == 3
    assert "build" in table
    assert "-bad" not in table


def test__ScriptTable__lookup():
    table = ScriptTable({"build": "echo hi"})
    assert table.try_get_body("build") == "echo hi"
    assert table.try_get_body("test") is None
    assert table.get_body("build") == "echo hi"
    with pytest.raises(KeyError):
        table.get_body("test")


def test__ScriptTable__is_not_affected_by_changes_to_the_source_mapping():
    scripts = {"build": "echo hi"}
    table = ScriptTable(scripts)
    scripts["test"] = "pytest"
    assert table.command_names == ("build",)
