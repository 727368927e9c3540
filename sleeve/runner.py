# Sleeve Process Runner
# Python interpreter invocation with optional privilege elevation

import os
import subprocess
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Optional

from sleeve.output.console import Console
from sleeve.utils.paths import normalize_path
from sleeve.utils.platform import HostPlatform, current_host


class CommandError(Exception):
    """Exception raised when an external command fails."""

    def __init__(self, message: str, returncode: Optional[int] = None, command: Optional[list[str]] = None):
        self.message = message
        self.returncode = returncode
        self.command = command or []
        super().__init__(message)


def _flatten(args: Iterable[Any]) -> list[str]:
    """Flatten nested lists/tuples of arguments into strings."""
    flat: list[str] = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            flat.extend(_flatten(arg))
        else:
            flat.append(str(arg))
    return flat


def get_interpreter(interpreter: Optional[str | Path] = None, *, host: Optional[HostPlatform] = None) -> str:
    """
    Get the normalized path of the Python interpreter to run.

    Args:
        interpreter: Interpreter path. Defaults to the running interpreter.
        host: Host platform. Detected when omitted.

    Returns:
        Absolute interpreter path.
    """
    return normalize_path(interpreter or sys.executable, host=host)


def needs_sudo(binary: str, *, host: Optional[HostPlatform] = None) -> bool:
    """
    Check whether running binary as its owner requires sudo.

    Never true on Windows-family hosts.
    """
    if host is None:
        host = current_host()
    if host.windows:
        return False
    return os.getuid() != os.stat(binary).st_uid


def build_python_command(
    *args: Any,
    module: Optional[str] = None,
    sudo: bool = False,
    interpreter: Optional[str | Path] = None,
    host: Optional[HostPlatform] = None,
) -> list[str]:
    """
    Build a command line that runs Python with the given arguments.

    Args:
        *args: Interpreter arguments. Nested lists are flattened.
        module: Run this module as a script (python -m).
        sudo: Run as the interpreter's owner via sudo when the current user
            doesn't own the binary.
        interpreter: Interpreter path. Defaults to the running interpreter.
        host: Host platform. Detected when omitted.

    Returns:
        Command as a list of strings.

    Raises:
        CommandError: If sudo is requested and the interpreter can't be inspected.
    """
    if host is None:
        host = current_host()

    python_bin = get_interpreter(interpreter, host=host)
    cmd: list[str] = []

    if sudo:
        try:
            if needs_sudo(python_bin, host=host):
                cmd.extend(["sudo", "-u", f"#{os.stat(python_bin).st_uid}"])
        except OSError as e:
            raise CommandError(
                f"Command python failed with status (unknown): [{python_bin}]",
                returncode=None,
                command=[python_bin],
            ) from e

    cmd.append(python_bin)
    if module:
        cmd.extend(["-m", module])
    cmd.extend(_flatten(args))
    return cmd


def run_command(
    cmd: Sequence[str],
    *,
    name: Optional[str] = None,
    cwd: Optional[Path] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> subprocess.CompletedProcess:
    """
    Run a command, streaming its output.

    Args:
        cmd: Command and arguments.
        name: Name used in error messages. Defaults to the executable name.
        cwd: Working directory.
        verbose: Echo the command before running it.
        console: Console used for the echo.

    Returns:
        CompletedProcess with result.

    Raises:
        CommandError: If the command exits non-zero or can't be started
            (missing executable, no permission, bad working directory).
    """
    cmd = list(cmd)
    name = name or Path(cmd[0]).name
    cmd_line = " ".join(cmd)

    if verbose:
        (console or Console()).print_command(cmd)

    try:
        result = subprocess.run(cmd, cwd=cwd, check=False)
    except OSError as e:
        raise CommandError(
            f"Command {name} failed with status (unknown): [{cmd_line}]",
            returncode=None,
            command=cmd,
        ) from e

    if result.returncode != 0:
        raise CommandError(
            f"Command {name} failed with status ({result.returncode}): [{cmd_line}]",
            returncode=result.returncode,
            command=cmd,
        )
    return result


def run_python(
    *args: Any,
    module: Optional[str] = None,
    sudo: bool = False,
    verbose: bool = False,
    interpreter: Optional[str | Path] = None,
    cwd: Optional[Path] = None,
    host: Optional[HostPlatform] = None,
    console: Optional[Console] = None,
) -> subprocess.CompletedProcess:
    """
    Run the Python interpreter with these command line arguments.

    For example:
        run_python("setup.py", "sdist")
        run_python("install", "wheel", module="pip", sudo=True)

    Raises:
        CommandError: If the interpreter exits non-zero.
    """
    cmd = build_python_command(*args, module=module, sudo=sudo, interpreter=interpreter, host=host)
    return run_command(cmd, name="python", cwd=cwd, verbose=verbose, console=console)
