"""Tests for relbuild.platform.files module."""

from __future__ import annotations

import hashlib
from pathlib import Path

from relbuild.platform.files import atomic_write_text, sha256_file


def test_atomic_write_text_adds_no_newline(tmp_path: Path) -> None:
    path = tmp_path / "VERSION"
    atomic_write_text(path, "v1.2.3")
    assert path.read_bytes() == b"v1.2.3"


def test_atomic_write_text_replaces_and_leaves_no_temp(tmp_path: Path) -> None:
    path = tmp_path / "EXTRATAG"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["EXTRATAG"]


def test_atomic_write_text_creates_parent(tmp_path: Path) -> None:
    path = tmp_path / "a" / "b" / "VERSION"
    atomic_write_text(path, "")
    assert path.read_bytes() == b""


def test_sha256_file_matches_hashlib(tmp_path: Path) -> None:
    data = b"\x7fELF" + bytes(range(256)) * 9000
    path = tmp_path / "polkadot"
    path.write_bytes(data)

    assert sha256_file(path) == hashlib.sha256(data).hexdigest()
