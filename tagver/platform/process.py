"""Subprocess execution with Result-based error handling.

This is the only module that spawns processes. A missing executable, a
timeout and a non-zero exit all come back as Err(ProcessError), so callers
never need try/except around a command. Output is decoded as UTF-8
with undecodable bytes replaced, as git does not guarantee an encoding
for tag messages or ref names.

Usage:
    match run(["git", "tag", "-l"], cwd=Path("."), timeout=30.0):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from tagver.core.result import Err, Ok, Result

__all__ = ["NOT_STARTED", "ProcessError", "run"]

# Return code used when the process could not be started or was killed
NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or NOT_STARTED.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the OS error text.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def started(self) -> bool:
        return self.returncode != NOT_STARTED

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory (current directory if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=command,
                returncode=NOT_STARTED,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=NOT_STARTED, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout or "",
                stderr=proc.stderr or "",
            )
        )

    return Ok(proc.stdout or "")
