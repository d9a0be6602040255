"""Verify command - check a staged binary against its checksum file."""

from __future__ import annotations

from pathlib import Path

import typer

from relbuild.cli.commands._helpers import exit_with_release_error, override_paths
from relbuild.cli.context import build_context
from relbuild.core.result import Err, Ok
from relbuild.services.builder import validate_binary_name
from relbuild.services.checksum import CHECKSUM_SUFFIX, verify_checksum_file


def verify(
    binary: str = typer.Argument(..., help="Binary whose artifact to verify"),
    artifacts_root: Path | None = typer.Option(
        None,
        "--artifacts-root",
        help="Artifacts root directory (default: /artifacts)",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(
        None, "--config", help="Config file (release-builder.toml)", show_default=False
    ),
) -> None:
    """Recompute the SHA-256 of a staged binary and compare it to BINARY.sha256."""
    ctx = build_context(config_path)
    config = override_paths(ctx.config, artifacts_root=artifacts_root)

    match validate_binary_name(binary):
        case Err(error):
            exit_with_release_error(error, ctx)
        case Ok(name):
            pass

    checksum_file = config.artifacts_root / name / f"{name}{CHECKSUM_SUFFIX}"
    match verify_checksum_file(checksum_file):
        case Err(error):
            exit_with_release_error(error, ctx)
        case Ok(digest):
            ctx.console.success(f"{name}: {digest}")
