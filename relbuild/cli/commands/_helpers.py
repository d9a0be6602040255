"""Shared helpers for CLI commands."""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from relbuild.core.config import Config
from relbuild.output.errors import print_release_error, release_error_exit_code
from relbuild.services.release_errors import ReleaseError

if TYPE_CHECKING:
    from relbuild.cli.context import CLIContext

DEFAULT_PROFILE = "production"
PROFILE_ENV_VAR = "PROFILE"


def resolve_profile(option: str | None, config: Config) -> str:
    """``--profile`` > ``$PROFILE`` > config file > "production"."""
    for candidate in (option, os.environ.get(PROFILE_ENV_VAR), config.profile):
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_PROFILE


def override_paths(
    config: Config,
    *,
    artifacts_root: Path | None = None,
    target_dir: Path | None = None,
) -> Config:
    """Apply path options given on the command line."""
    if artifacts_root is not None:
        config = replace(config, artifacts_root=artifacts_root.expanduser())
    if target_dir is not None:
        config = replace(config, build=replace(config.build, target_dir=target_dir.expanduser()))
    return config


def exit_with_release_error(error: ReleaseError, ctx: CLIContext) -> NoReturn:
    print_release_error(error, ctx.console)
    raise typer.Exit(code=release_error_exit_code(error))
