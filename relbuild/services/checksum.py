"""Checksum files in the two-column ``sha256sum`` format.

A checksum file holds one line, ``<hex digest>  <file name>``, so a staged
artifact can be checked later with ``sha256sum -c``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relbuild.core.result import Err, Ok, Result
from relbuild.platform.files import sha256_file
from relbuild.services.release_errors import (
    ArtifactIOError,
    ChecksumError,
    ChecksumFileInvalid,
    ChecksumMismatch,
)

__all__ = [
    "CHECKSUM_SUFFIX",
    "ChecksumFile",
    "checksum_path_for",
    "format_checksum_line",
    "parse_checksum_line",
    "verify_checksum_file",
    "write_checksum_file",
]

CHECKSUM_SUFFIX = ".sha256"

# "<digest>  <name>" for text mode, "<digest> *<name>" for binary mode
_LINE_RE = re.compile(r"^([0-9a-f]{64}) [ *](.+)$")


@dataclass(frozen=True, slots=True)
class ChecksumFile:
    path: Path
    digest: str
    line: str


def checksum_path_for(binary_path: Path) -> Path:
    return binary_path.with_name(binary_path.name + CHECKSUM_SUFFIX)


def format_checksum_line(digest: str, name: str) -> str:
    return f"{digest}  {name}\n"


def parse_checksum_line(line: str) -> tuple[str, str] | None:
    """Split a checksum line into (digest, name), None if malformed."""
    m = _LINE_RE.match(line.rstrip("\r\n"))
    if m is None:
        return None
    return (m.group(1), m.group(2))


def write_checksum_file(binary_path: Path) -> Result[ChecksumFile, ArtifactIOError]:
    """Hash ``binary_path`` and write ``<binary>.sha256`` next to it."""
    path = checksum_path_for(binary_path)
    try:
        digest = sha256_file(binary_path)
        line = format_checksum_line(digest, binary_path.name)
        path.write_text(line, encoding="utf-8", newline="")
    except OSError as e:
        return Err(ArtifactIOError(path=path, reason=e.strerror or str(e)))
    return Ok(ChecksumFile(path=path, digest=digest, line=line))


def verify_checksum_file(path: Path) -> Result[str, ChecksumError]:
    """Recompute the digest of the file named in ``path`` and compare.

    The named file is resolved relative to the checksum file's directory.

    Returns:
        Ok(digest) when the recorded and actual digests match
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(ArtifactIOError(path=path, reason=e.strerror or str(e)))

    lines = [ln for ln in content.splitlines() if ln.strip()]
    if len(lines) != 1:
        return Err(ChecksumFileInvalid(path=path, reason=f"expected 1 line, found {len(lines)}"))

    parsed = parse_checksum_line(lines[0])
    if parsed is None:
        return Err(ChecksumFileInvalid(path=path, reason="not a '<sha256>  <name>' line"))
    expected, name = parsed

    target = path.parent / name
    try:
        actual = sha256_file(target)
    except OSError as e:
        return Err(ArtifactIOError(path=target, reason=e.strerror or str(e)))

    if actual != expected:
        return Err(ChecksumMismatch(path=target, expected=expected, actual=actual))
    return Ok(actual)
