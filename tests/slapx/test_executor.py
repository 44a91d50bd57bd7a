import json
import os
import shlex
import sys
from pathlib import Path

import pytest

from slapx.executor import (
    INIT_DIRECTORY_VARIABLE,
    RECURSIVE_CALL_VARIABLE,
    EnvironmentPathOptions,
    ProcessExecutor,
    build_environment,
)


def test__build_environment__prepends_bin_directories_to_path():
    options = EnvironmentPathOptions(project_bin=Path("/project/.venv/bin"), repository_bin=Path("/repo/.venv/bin"))
    environ = build_environment({"PATH": "/usr/bin", "OTHER": "1"}, Path("/repo"), options)
    expected_path = [str(Path("/project/.venv/bin")), str(Path("/repo/.venv/bin")), "/usr/bin"]
    assert environ["PATH"] == os.pathsep.join(expected_path)
    assert environ["OTHER"] == "1"
    assert environ[INIT_DIRECTORY_VARIABLE] == str(Path("/repo"))
    assert environ[RECURSIVE_CALL_VARIABLE] == "1"


def test__build_environment__does_not_modify_the_base():
    base = {"PATH": "/usr/bin"}
    build_environment(base, Path("/repo"), EnvironmentPathOptions(project_bin=Path("/bin")))
    assert base == {"PATH": "/usr/bin"}


def test__build_environment__keeps_the_spelling_of_the_path_variable():
    environ = build_environment({"Path": "C:\\Windows"}, Path("/repo"), EnvironmentPathOptions(project_bin=Path("/b")))
    assert "PATH" not in environ
    assert environ["Path"].endswith(os.pathsep + "C:\\Windows")


def test__build_environment__without_existing_path():
    environ = build_environment({}, Path("/repo"), EnvironmentPathOptions(project_bin=Path("/b")))
    assert environ["PATH"] == str(Path("/b"))


def _python(code: str) -> str:
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


@pytest.mark.skipif(os.name == "nt", reason="requires a POSIX shell")
def test__ProcessExecutor__returns_the_exit_code(tmp_path: Path):
    executor = ProcessExecutor(dict(os.environ))
    assert executor.execute("exit 0", tmp_path, tmp_path) == 0
    assert executor.execute("exit 3", tmp_path, tmp_path) == 3
    assert executor.execute("true && exit 7", tmp_path, tmp_path) == 7


@pytest.mark.skipif(os.name == "nt", reason="requires a POSIX shell")
def test__ProcessExecutor__runs_in_working_directory_with_environment(tmp_path: Path):
    output_file = tmp_path / "out.json"
    code = (
        "import json, os, sys; "
        f"json.dump({{'cwd': os.getcwd(), 'env': dict(os.environ)}}, open({str(output_file)!r}, 'w'))"
    )
    workdir = tmp_path / "project"
    workdir.mkdir()
    executor = ProcessExecutor({**os.environ, "PATH": "/usr/bin:/bin"})
    exit_code = executor.execute(
        _python(code),
        workdir,
        tmp_path,
        EnvironmentPathOptions(project_bin=workdir / ".venv" / "bin"),
        show_output=False,
    )
    assert exit_code == 0
    result = json.loads(output_file.read_text())
    assert Path(result["cwd"]).resolve() == workdir.resolve()
    assert result["env"]["PATH"].split(os.pathsep)[0] == str(workdir / ".venv" / "bin")
    assert result["env"][INIT_DIRECTORY_VARIABLE] == str(tmp_path)
    assert result["env"][RECURSIVE_CALL_VARIABLE] == "1"


@pytest.mark.skipif(os.name == "nt", reason="requires a POSIX shell")
def test__ProcessExecutor__expands_shell_syntax(tmp_path: Path):
    executor = ProcessExecutor({**os.environ, "GREETING": "hello"})
    executor.execute('echo "$GREETING" | cat > greeting.txt', tmp_path, tmp_path)
    assert (tmp_path / "greeting.txt").read_text().strip() == "hello"


def test__ProcessExecutor__raises_for_missing_working_directory(tmp_path: Path):
    executor = ProcessExecutor(dict(os.environ))
    with pytest.raises(OSError):
        executor.execute("exit 0", tmp_path / "does-not-exist", tmp_path)


def test__build_environment__leaves_path_alone_without_directories():
    environ = build_environment({"PATH": "/usr/bin"}, Path("/repo"), EnvironmentPathOptions())
    assert environ["PATH"] == "/usr/bin"
    assert environ[RECURSIVE_CALL_VARIABLE] == "1"
