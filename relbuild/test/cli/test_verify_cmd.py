from __future__ import annotations

import hashlib
from pathlib import Path

import pytest
import typer

from relbuild.cli.context import CLIContext
from relbuild.core.config import Config
from relbuild.core.errors import ErrorCode
from relbuild.output.console import MockConsole


def _setup(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[MockConsole, Path]:
    import relbuild.cli.commands.verify_cmd as verify_cmd

    console = MockConsole()
    ctx = CLIContext(root=tmp_path, config=Config(artifacts_root=tmp_path), console=console)
    monkeypatch.setattr(verify_cmd, "build_context", lambda _path=None: ctx)

    directory = tmp_path / "polkadot"
    directory.mkdir()
    (directory / "polkadot").write_bytes(b"bin")
    digest = hashlib.sha256(b"bin").hexdigest()
    (directory / "polkadot.sha256").write_text(f"{digest}  polkadot\n")
    return console, directory


def test_verify_ok(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relbuild.cli.commands.verify_cmd as verify_cmd

    console, _ = _setup(tmp_path, monkeypatch)

    verify_cmd.verify(binary="polkadot", artifacts_root=None, config_path=None)

    assert console.messages == [f"OK polkadot: {hashlib.sha256(b'bin').hexdigest()}"]


def test_verify_mismatch(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relbuild.cli.commands.verify_cmd as verify_cmd

    console, directory = _setup(tmp_path, monkeypatch)
    (directory / "polkadot").write_bytes(b"changed")

    with pytest.raises(typer.Exit) as exc:
        verify_cmd.verify(binary="polkadot", artifacts_root=None, config_path=None)

    assert exc.value.exit_code == int(ErrorCode.BUILD_ERROR)
    assert console.has_error()


def test_verify_missing_artifact(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relbuild.cli.commands.verify_cmd as verify_cmd

    _setup(tmp_path, monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        verify_cmd.verify(binary="polkadot-parachain", artifacts_root=None, config_path=None)

    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)


def test_verify_rejects_path_in_binary_name(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relbuild.cli.commands.verify_cmd as verify_cmd

    console, _ = _setup(tmp_path, monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        verify_cmd.verify(binary="../x", artifacts_root=None, config_path=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert "plain file name" in console.text
