from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relbuild.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from relbuild.core.errors import ErrorCode
from relbuild.core.result import Err
from relbuild.output.console import ConsoleProtocol, RichConsole

CONFIG_ENV_VAR = "RELEASE_BUILDER_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Resolve the working tree and config for a command.

    An explicit ``--config`` or ``RELEASE_BUILDER_CONFIG`` must exist;
    ``release-builder.toml`` in the working directory is optional.
    """
    root = Path.cwd().resolve()
    console = RichConsole()

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path is not None:
        result = load_config(config_path)
    elif env_path:
        result = load_config(Path(env_path))
    else:
        result = load_config_or_default(root / CONFIG_FILENAME)

    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(root=root, config=result.value, console=console)
