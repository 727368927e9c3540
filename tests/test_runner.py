# Tests for sleeve.runner
# Python interpreter invocation

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from sleeve.runner import (
    CommandError,
    build_python_command,
    get_interpreter,
    needs_sudo,
    run_command,
    run_python,
)

PYTHON = "/usr/bin/python3"


class TestCommandError:
    """Tests for CommandError exception."""

    def test_basic_error(self):
        err = CommandError("failed")
        assert err.message == "failed"
        assert err.returncode is None
        assert err.command == []
        assert str(err) == "failed"

    def test_error_with_details(self):
        err = CommandError("failed", returncode=2, command=["python", "x.py"])
        assert err.returncode == 2
        assert err.command == ["python", "x.py"]


class TestGetInterpreter:
    """Tests for get_interpreter."""

    def test_explicit(self, linux_host):
        assert get_interpreter(PYTHON, host=linux_host) == PYTHON

    @patch("sleeve.runner.sys.executable", "/opt/python/bin/python3")
    def test_defaults_to_running_interpreter(self, linux_host):
        assert get_interpreter(host=linux_host) == "/opt/python/bin/python3"


class TestNeedsSudo:
    """Tests for needs_sudo."""

    @patch("sleeve.runner.os.stat", return_value=MagicMock(st_uid=0))
    @patch("sleeve.runner.os.getuid", return_value=1000, create=True)
    def test_other_owner(self, mock_uid, mock_stat, linux_host):
        assert needs_sudo(PYTHON, host=linux_host) is True

    @patch("sleeve.runner.os.stat", return_value=MagicMock(st_uid=1000))
    @patch("sleeve.runner.os.getuid", return_value=1000, create=True)
    def test_same_owner(self, mock_uid, mock_stat, linux_host):
        assert needs_sudo(PYTHON, host=linux_host) is False

    @patch("sleeve.runner.os.stat")
    def test_never_on_windows(self, mock_stat, windows_host):
        assert needs_sudo(PYTHON, host=windows_host) is False
        mock_stat.assert_not_called()


class TestBuildPythonCommand:
    """Tests for build_python_command."""

    def test_plain(self, linux_host):
        cmd = build_python_command("setup.py", "sdist", interpreter=PYTHON, host=linux_host)
        assert cmd == [PYTHON, "setup.py", "sdist"]

    def test_module(self, linux_host):
        cmd = build_python_command("install", "wheel", module="pip", interpreter=PYTHON, host=linux_host)
        assert cmd == [PYTHON, "-m", "pip", "install", "wheel"]

    def test_flattens_nested_args(self, linux_host):
        cmd = build_python_command("a", ["b", ("c", 1)], interpreter=PYTHON, host=linux_host)
        assert cmd == [PYTHON, "a", "b", "c", "1"]

    @patch("sleeve.runner.os.stat", return_value=MagicMock(st_uid=0))
    @patch("sleeve.runner.os.getuid", return_value=1000, create=True)
    def test_sudo_when_not_owner(self, mock_uid, mock_stat, linux_host):
        cmd = build_python_command("x.py", sudo=True, interpreter=PYTHON, host=linux_host)
        assert cmd == ["sudo", "-u", "#0", PYTHON, "x.py"]

    @patch("sleeve.runner.os.stat", return_value=MagicMock(st_uid=1000))
    @patch("sleeve.runner.os.getuid", return_value=1000, create=True)
    def test_no_sudo_when_owner(self, mock_uid, mock_stat, linux_host):
        cmd = build_python_command("x.py", sudo=True, interpreter=PYTHON, host=linux_host)
        assert cmd == [PYTHON, "x.py"]

    @patch("sleeve.runner.os.stat", return_value=MagicMock(st_uid=0))
    @patch("sleeve.runner.os.getuid", return_value=1000, create=True)
    def test_sudo_not_requested(self, mock_uid, mock_stat, linux_host):
        cmd = build_python_command("x.py", interpreter=PYTHON, host=linux_host)
        assert cmd[0] == PYTHON

    @patch("sleeve.runner.os.stat", side_effect=FileNotFoundError(2, "No such file or directory"))
    @patch("sleeve.runner.os.getuid", return_value=1000, create=True)
    def test_sudo_with_missing_interpreter(self, mock_uid, mock_stat, linux_host):
        with pytest.raises(CommandError, match=r"status \(unknown\): \[/nope/python3\]") as exc_info:
            build_python_command("x.py", sudo=True, interpreter="/nope/python3", host=linux_host)
        assert exc_info.value.returncode is None
        assert exc_info.value.command == ["/nope/python3"]

    @patch("sleeve.runner.os.stat", side_effect=FileNotFoundError)
    def test_missing_interpreter_without_sudo(self, mock_stat, linux_host):
        cmd = build_python_command("x.py", interpreter="/nope/python3", host=linux_host)
        assert cmd == ["/nope/python3", "x.py"]
        mock_stat.assert_not_called()

    def test_windows_interpreter_path(self, windows_host):
        cmd = build_python_command("x.py", sudo=True, interpreter=PYTHON, host=windows_host)
        assert cmd[0] == "\\usr\\bin\\python3"
        assert "sudo" not in cmd


class TestRunCommand:
    """Tests for run_command."""

    @patch("sleeve.runner.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[PYTHON, "x.py"], returncode=0)
        result = run_command([PYTHON, "x.py"])
        assert result.returncode == 0
        mock_run.assert_called_once_with([PYTHON, "x.py"], cwd=None, check=False)

    @patch("sleeve.runner.subprocess.run")
    def test_failure_raises(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[PYTHON, "bad.py"], returncode=2)
        with pytest.raises(CommandError) as exc_info:
            run_command([PYTHON, "bad.py"], name="python")
        err = exc_info.value
        assert err.returncode == 2
        assert err.command == [PYTHON, "bad.py"]
        assert err.message == f"Command python failed with status (2): [{PYTHON} bad.py]"

    @patch("sleeve.runner.subprocess.run")
    def test_name_defaults_to_executable(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[PYTHON], returncode=1)
        with pytest.raises(CommandError, match="Command python3 failed"):
            run_command([PYTHON])

    @patch("sleeve.runner.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_executable(self, mock_run):
        with pytest.raises(CommandError, match=r"status \(unknown\)") as exc_info:
            run_command(["/nope/python", "x.py"])
        assert exc_info.value.returncode is None

    @patch("sleeve.runner.subprocess.run", side_effect=PermissionError(13, "Permission denied"))
    def test_not_executable(self, mock_run):
        with pytest.raises(CommandError, match=r"status \(unknown\)") as exc_info:
            run_command([PYTHON, "x.py"])
        assert exc_info.value.returncode is None
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_bad_working_directory(self, temp_dir):
        with pytest.raises(CommandError, match=r"status \(unknown\)") as exc_info:
            run_command([PYTHON, "x.py"], cwd=temp_dir / "missing")
        assert exc_info.value.returncode is None

    @patch("sleeve.runner.subprocess.run")
    def test_verbose_echoes_command(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[PYTHON], returncode=0)
        console = MagicMock()
        run_command([PYTHON, "x.py"], verbose=True, console=console)
        console.print_command.assert_called_once_with([PYTHON, "x.py"])

    @patch("sleeve.runner.subprocess.run")
    def test_quiet_by_default(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[PYTHON], returncode=0)
        console = MagicMock()
        run_command([PYTHON, "x.py"], console=console)
        console.print_command.assert_not_called()

    @patch("sleeve.runner.subprocess.run")
    def test_cwd_passed(self, mock_run, temp_dir):
        mock_run.return_value = subprocess.CompletedProcess(args=[PYTHON], returncode=0)
        run_command([PYTHON], cwd=temp_dir)
        mock_run.assert_called_once_with([PYTHON], cwd=temp_dir, check=False)


class TestRunPython:
    """Tests for run_python."""

    @patch("sleeve.runner.subprocess.run")
    def test_runs_interpreter(self, mock_run, linux_host):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        run_python("-c", "pass", interpreter=PYTHON, host=linux_host)
        mock_run.assert_called_once_with([PYTHON, "-c", "pass"], cwd=None, check=False)

    @patch("sleeve.runner.subprocess.run")
    def test_failure_names_python(self, mock_run, linux_host):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=3)
        with pytest.raises(CommandError) as exc_info:
            run_python("x.py", module=None, interpreter=PYTHON, host=linux_host)
        assert exc_info.value.message == f"Command python failed with status (3): [{PYTHON} x.py]"
