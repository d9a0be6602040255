from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class InvalidInput:
    reason: str


@dataclass(frozen=True, slots=True)
class BuildFailed:
    returncode: int
    command: tuple[str, ...] = ()
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ArtifactIOError:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class GitFailed:
    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class VersionProbeFailed:
    binary: Path
    returncode: int
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class ChecksumMismatch:
    path: Path
    expected: str
    actual: str


@dataclass(frozen=True, slots=True)
class ChecksumFileInvalid:
    path: Path
    reason: str


ChecksumError = ChecksumMismatch | ChecksumFileInvalid | ArtifactIOError

ReleaseError = (
    InvalidInput
    | BuildFailed
    | ArtifactIOError
    | GitFailed
    | VersionProbeFailed
    | ChecksumMismatch
    | ChecksumFileInvalid
)
