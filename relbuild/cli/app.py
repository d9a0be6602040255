from __future__ import annotations

import typer

from relbuild.cli.commands.build_cmd import build
from relbuild.cli.commands.verify_cmd import verify


# release-builder <binary-name> [package-name]
app = typer.Typer(add_completion=False, rich_markup_mode="rich")
app.command()(build)

# release-builder-verify <binary-name>
verify_app = typer.Typer(add_completion=False, rich_markup_mode="rich")
verify_app.command()(verify)


def main() -> None:
    app()


def verify_main() -> None:
    verify_app()
