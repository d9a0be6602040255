"""Subprocess execution with Result-based error handling.

Two flavours are provided:

- ``run`` captures output, for git queries and ``<binary> --version``.
- ``run_silent`` lets output stream to the terminal, for the build tool,
  whose log must reach the CI job unaltered.

Usage:
    match run(["git", "tag", "-l", "--contains", "HEAD"], cwd=root):
        case Ok(stdout):
            tags = stdout.splitlines()
        case Err(error):
            print(error.stderr)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relbuild.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process, -1 if it never ran or timed out.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the launch/timeout reason.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def _timeout_error(cmd: list[str], timeout: float | None, stdout: object) -> ProcessError:
    return ProcessError(
        command=tuple(cmd),
        returncode=-1,
        stdout=stdout if isinstance(stdout, str) else "",
        stderr=f"Command timed out after {timeout}s",
    )


def _launch_error(cmd: list[str], error: OSError) -> ProcessError:
    return ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(error))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(_timeout_error(cmd, timeout, e.stdout))
    except OSError as e:
        return Err(_launch_error(cmd, e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command without capturing output.

    stdout and stderr are inherited, so the tool's own diagnostics are shown
    verbatim. On failure only the exit code is known.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(_timeout_error(cmd, timeout, None))
    except OSError as e:
        return Err(_launch_error(cmd, e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)
