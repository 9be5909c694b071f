"""
Subprocess helpers for depflat.

External package-manager commands (``yarn list``, ``npm list``,
``npm shrinkwrap``) are executed through :func:`run_command`, which
captures their output without interpreting the exit status. Deciding
whether a run succeeded is left to the caller, since each package
manager signals failure differently.

The executable is looked up on ``PATH`` with :func:`shutil.which` before
the process starts, so wrappers such as ``npm.cmd`` on Windows are found
without running through a shell.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from depflat.utils.logger import get_logger
from depflat.exceptions import CommandError

logger = get_logger("shell")


@dataclass
class CommandResult:
    """Captured outcome of an external command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


#: Signature of a command runner, injectable for tests.
CommandRunner = Callable[..., CommandResult]


def run_command(
    command: str,
    *,
    cwd: Union[str, Path] = ".",
    timeout: Optional[float] = None,
) -> CommandResult:
    """Run ``command`` in ``cwd`` and capture its output.

    Args:
        command: Command line, split with :func:`shlex.split`.
        cwd: Working directory for the process.
        timeout: Seconds to wait before giving up, or ``None``.

    Returns:
        The captured :class:`CommandResult`.

    Raises:
        CommandError: The executable is missing or the timeout expired.
    """
    argv = shlex.split(command)
    executable = shutil.which(argv[0])
    if executable:
        argv[0] = executable
    logger.debug("Running %r in %s", argv, cwd)

    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            cwd=str(cwd),
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise CommandError(
            f"Executable not found for {command!r}. Is it installed?",
            command=command,
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandError(
            f"{command!r} timed out after {timeout} seconds",
            command=command,
        ) from exc

    logger.debug("%r exited with status %d", command, completed.returncode)
    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
