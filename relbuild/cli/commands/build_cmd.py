"""Build command - build a binary and stage it as a release artifact."""

from __future__ import annotations

from pathlib import Path

import typer

from relbuild import __version__
from relbuild.cli.commands._helpers import (
    exit_with_release_error,
    override_paths,
    resolve_profile,
)
from relbuild.cli.context import CLIContext, build_context
from relbuild.core.result import Err, Ok
from relbuild.output.console import Style
from relbuild.services.builder import BuildPlan, BuildRequest, ReleaseBuilder


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def build(
    binary: str | None = typer.Argument(
        None, help="Binary to build (e.g. polkadot)", show_default=False
    ),
    package: str | None = typer.Argument(
        None, help="Package containing the binary (default: BINARY)", show_default=False
    ),
    profile: str | None = typer.Option(
        None,
        "--profile",
        help="Build profile (default: $PROFILE or production)",
        show_default=False,
    ),
    artifacts_root: Path | None = typer.Option(
        None,
        "--artifacts-root",
        help="Artifacts root directory (default: /artifacts)",
        show_default=False,
    ),
    target_dir: Path | None = typer.Option(
        None, "--target-dir", help="Build tool output directory", show_default=False
    ),
    config_path: Path | None = typer.Option(
        None, "--config", help="Config file (release-builder.toml)", show_default=False
    ),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="Continue to staging even if the build fails"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without running them"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Build BINARY and stage it with checksum, VERSION and EXTRATAG."""
    ctx = build_context(config_path)
    config = override_paths(ctx.config, artifacts_root=artifacts_root, target_dir=target_dir)

    match BuildRequest.create(binary, package, profile=resolve_profile(profile, config)):
        case Err(error):
            exit_with_release_error(error, ctx)
        case Ok(request):
            pass

    builder = ReleaseBuilder(workspace_root=ctx.root, config=config, console=ctx.console)

    if dry_run:
        _print_plan(builder.plan(request), ctx)
        return

    match builder.run(request, keep_going=keep_going):
        case Err(error):
            exit_with_release_error(error, ctx)
        case Ok(record):
            ctx.console.success(str(record.directory))


def _print_plan(plan: BuildPlan, ctx: CLIContext) -> None:
    ctx.console.print(f"Artifacts will be copied into {plan.directory}")
    ctx.console.print(" ".join(plan.build_command), Style.DIM)
    ctx.console.print(f"copy {plan.source_binary} -> {plan.staged_binary}", Style.DIM)
    for path in (plan.checksum_file, plan.version_file, plan.extratag_file):
        ctx.console.print(f"write {path}", Style.DIM)
