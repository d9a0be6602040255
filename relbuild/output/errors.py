"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relbuild.core.errors import ErrorCode
from relbuild.output.console import Style
from relbuild.services.release_errors import (
    ArtifactIOError,
    BuildFailed,
    ChecksumFileInvalid,
    ChecksumMismatch,
    GitFailed,
    InvalidInput,
    ReleaseError,
    VersionProbeFailed,
)

if TYPE_CHECKING:
    from relbuild.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a one-line cause, plus a dim hint where one helps."""
    match error:
        case InvalidInput(reason=reason):
            console.error(reason)
            console.print("usage: release-builder <binary-name> [package-name]", Style.DIM)
        case BuildFailed(returncode=rc, command=command, detail=detail):
            console.error(f"build failed (exit {rc})")
            if detail:
                console.print(detail, Style.DIM)
            if command:
                console.print(f"command: {' '.join(command)}", Style.DIM)
        case ArtifactIOError(path=path, reason=reason):
            console.error(f"{path}: {reason}")
        case GitFailed(command=command, message=message, returncode=rc):
            console.error(f"git {command} failed (exit {rc}): {message}")
        case VersionProbeFailed(binary=binary, returncode=rc, stderr=stderr):
            console.error(f"{binary} --version failed (exit {rc})")
            if stderr:
                console.print(stderr, Style.DIM)
        case ChecksumMismatch(path=path, expected=expected, actual=actual):
            console.error(f"checksum mismatch for {path}")
            console.print(f"hint: expected {expected}, got {actual}", Style.DIM)
        case ChecksumFileInvalid(path=path, reason=reason):
            console.error(f"invalid checksum file {path}: {reason}")


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case InvalidInput():
            return int(ErrorCode.USER_ERROR)
        case GitFailed():
            return int(ErrorCode.ENV_ERROR)
        case BuildFailed() | VersionProbeFailed() | ChecksumMismatch():
            return int(ErrorCode.BUILD_ERROR)
        case ArtifactIOError() | ChecksumFileInvalid():
            return int(ErrorCode.IO_ERROR)
    raise AssertionError(f"unexpected release error: {error!r}")
