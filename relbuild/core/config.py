"""Typed configuration loading and access.

The release builder reads an optional ``release-builder.toml``. Every field
has a default, so running without a config file is the common case in CI.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_number, get_str, get_table

__all__ = [
    "BuildToolConfig",
    "Config",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_ARTIFACTS_ROOT",
    "TimeoutsConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "release-builder.toml"
DEFAULT_ARTIFACTS_ROOT = Path("/artifacts")

_BUILD_TIMEOUT_SECONDS = 2 * 60 * 60.0
_GIT_TIMEOUT_SECONDS = 30.0
_VERSION_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BuildToolConfig:
    """How the build tool is invoked."""

    tool: str = "cargo"
    locked: bool = True
    verbose: bool = True
    target_dir: Path = Path("target")


@dataclass(frozen=True, slots=True)
class TimeoutsConfig:
    """Per-step timeouts in seconds."""

    build: float = _BUILD_TIMEOUT_SECONDS
    git: float = _GIT_TIMEOUT_SECONDS
    version: float = _VERSION_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container.

    ``profile`` stays None unless the file sets it; the CLI applies the
    ``PROFILE`` environment variable and the final default.
    """

    profile: str | None = None
    artifacts_root: Path = DEFAULT_ARTIFACTS_ROOT
    build: BuildToolConfig = field(default_factory=BuildToolConfig)
    timeouts: TimeoutsConfig = field(default_factory=TimeoutsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a timeout is not a positive number.
        """
        build: StrDict = get_table(data, "build") or {}
        timeouts: StrDict = get_table(data, "timeouts") or {}

        artifacts_root = get_str(data, "artifacts_root")
        target_dir = get_str(build, "target_dir")

        locked = get_bool(build, "locked")
        verbose = get_bool(build, "verbose")

        return cls(
            profile=get_str(data, "profile"),
            artifacts_root=Path(artifacts_root) if artifacts_root else DEFAULT_ARTIFACTS_ROOT,
            build=BuildToolConfig(
                tool=get_str(build, "tool") or "cargo",
                locked=True if locked is None else locked,
                verbose=True if verbose is None else verbose,
                target_dir=Path(target_dir) if target_dir else Path("target"),
            ),
            timeouts=TimeoutsConfig(
                build=_positive(timeouts, "build", _BUILD_TIMEOUT_SECONDS),
                git=_positive(timeouts, "git", _GIT_TIMEOUT_SECONDS),
                version=_positive(timeouts, "version", _VERSION_TIMEOUT_SECONDS),
            ),
        )


def _positive(table: Mapping[str, object], key: str, default: float) -> float:
    value = get_number(table, key)
    if value is None:
        return default
    if value <= 0:
        raise ValueError(f"timeouts.{key} must be positive, got {value:g}")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Cannot read config {path}: {e.strerror or e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path | None) -> Result[Config, ConfigError]:
    """Load config if the file exists, default Config otherwise.

    A file that exists but cannot be parsed is still an error.
    """
    if path is None or not path.exists():
        return Ok(Config())
    return load_config(path)
