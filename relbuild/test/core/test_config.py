"""Tests for relbuild.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relbuild.core.config import (
    DEFAULT_ARTIFACTS_ROOT,
    BuildToolConfig,
    Config,
    TimeoutsConfig,
    load_config,
    load_config_or_default,
)
from relbuild.core.result import Err, Ok


class TestDefaults:
    def test_config_defaults(self) -> None:
        config = Config()
        assert config.profile is None
        assert config.artifacts_root == DEFAULT_ARTIFACTS_ROOT == Path("/artifacts")
        assert config.build == BuildToolConfig()
        assert config.timeouts == TimeoutsConfig()

    def test_build_tool_defaults(self) -> None:
        build = BuildToolConfig()
        assert build.tool == "cargo"
        assert build.locked is True
        assert build.verbose is True
        assert build.target_dir == Path("target")

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.profile = "release"  # type: ignore[misc]


class TestFromDict:
    def test_full_table(self) -> None:
        config = Config.from_dict(
            {
                "profile": "release",
                "artifacts_root": "/tmp/out",
                "build": {"tool": "cross", "locked": False, "verbose": False, "target_dir": "t"},
                "timeouts": {"build": 60, "git": 5, "version": 2.5},
            }
        )
        assert config.profile == "release"
        assert config.artifacts_root == Path("/tmp/out")
        assert config.build == BuildToolConfig(
            tool="cross", locked=False, verbose=False, target_dir=Path("t")
        )
        assert config.timeouts == TimeoutsConfig(build=60.0, git=5.0, version=2.5)

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = Config.from_dict({"profile": 3, "build": {"locked": "yes"}, "timeouts": "x"})
        assert config.profile is None
        assert config.build.locked is True
        assert config.timeouts == TimeoutsConfig()

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="timeouts.git"):
            Config.from_dict({"timeouts": {"git": 0}})


class TestLoadConfig:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "release-builder.toml"
        path.write_text('profile = "testnet"\n\n[build]\nlocked = false\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.profile == "testnet"
        assert result.value.build.locked is False

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("profile = \n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[timeouts]\nbuild = -1\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_directory_instead_of_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path)

        assert isinstance(result, Err)
        assert "Cannot read config" in result.error.message
        assert result.error.path == tmp_path


class TestLoadConfigOrDefault:
    def test_absent_file_gives_default(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "release-builder.toml") == Ok(Config())

    def test_none_gives_default(self) -> None:
        assert load_config_or_default(None) == Ok(Config())

    def test_present_but_broken_is_error(self, tmp_path: Path) -> None:
        path = tmp_path / "release-builder.toml"
        path.write_text("[[[", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)
