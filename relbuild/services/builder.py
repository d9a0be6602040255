"""Release builder: build a binary and stage it with its metadata.

One linear pass per binary:

1. create ``<artifacts_root>/<binary>``
2. look up the release tag containing HEAD
3. build with the configured tool (cargo)
4. copy the binary into the artifact directory
5. write ``<binary>.sha256``
6. derive the extra tag from ``<binary> --version`` and the checksum
7. write ``VERSION`` and ``EXTRATAG``

Every step fails fast by returning ``Err``; only a failing build can be
downgraded to a warning with ``keep_going``.
"""

from __future__ import annotations

import shutil
import time
from dataclasses import dataclass
from pathlib import Path

from ..core.config import Config
from ..core.result import Err, Ok, Result
from ..git.repository import Repository
from ..output.console import ConsoleProtocol, Style
from ..platform.files import atomic_write_text
from ..platform.process import run, run_silent
from .checksum import ChecksumFile, checksum_path_for, write_checksum_file
from .release_errors import (
    ArtifactIOError,
    BuildFailed,
    GitFailed,
    InvalidInput,
    ReleaseError,
    VersionProbeFailed,
)
from .version import compose_extra_tag, parse_version_fragment

__all__ = [
    "ArtifactRecord",
    "BuildPlan",
    "BuildRequest",
    "EXTRATAG_FILENAME",
    "ReleaseBuilder",
    "VERSION_FILENAME",
    "validate_binary_name",
]

VERSION_FILENAME = "VERSION"
EXTRATAG_FILENAME = "EXTRATAG"

# cargo writes these profiles to a directory not named after the profile
_PROFILE_OUTPUT_DIRS = {"dev": "debug", "test": "debug", "bench": "release"}


def validate_binary_name(binary: str | None) -> Result[str, InvalidInput]:
    """Stripped binary name; it must be a plain file name."""
    name = (binary or "").strip()
    if not name:
        return Err(InvalidInput("binary name is required"))
    if "/" in name or "\\" in name or name in {".", ".."}:
        return Err(InvalidInput(f"binary name must be a plain file name: {name!r}"))
    return Ok(name)


@dataclass(frozen=True, slots=True)
class BuildRequest:
    binary: str
    package: str
    profile: str

    @classmethod
    def create(
        cls,
        binary: str | None,
        package: str | None = None,
        *,
        profile: str,
    ) -> Result[BuildRequest, InvalidInput]:
        """Validate inputs; ``package`` defaults to ``binary``."""
        named = validate_binary_name(binary)
        if isinstance(named, Err):
            return named
        name = named.value

        pkg = (package or "").strip() or name

        prof = profile.strip()
        if not prof:
            return Err(InvalidInput("build profile must not be empty"))

        return Ok(cls(binary=name, package=pkg, profile=prof))


@dataclass(frozen=True, slots=True)
class BuildPlan:
    """Paths and commands a run will use, computed without side effects."""

    directory: Path
    build_command: tuple[str, ...]
    source_binary: Path
    staged_binary: Path
    checksum_file: Path
    version_file: Path
    extratag_file: Path


@dataclass(frozen=True, slots=True)
class ArtifactRecord:
    directory: Path
    binary_path: Path
    checksum_path: Path
    digest: str
    version: str
    extra_tag: str


class ReleaseBuilder:
    """Build and stage one release binary."""

    def __init__(
        self,
        *,
        workspace_root: Path,
        config: Config,
        console: ConsoleProtocol,
        repository: Repository | None = None,
    ) -> None:
        self._root = workspace_root
        self._config = config
        self._console = console
        self._repo = repository or Repository(workspace_root, timeout=config.timeouts.git)

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def artifact_dir(self, request: BuildRequest) -> Path:
        return self._config.artifacts_root / request.binary

    def build_command(self, request: BuildRequest) -> list[str]:
        build = self._config.build
        cmd = [build.tool, "build", "--profile", request.profile]
        if build.locked:
            cmd.append("--locked")
        if build.verbose:
            cmd.append("--verbose")
        cmd += ["--bin", request.binary, "--package", request.package]
        return cmd

    def built_binary_path(self, request: BuildRequest) -> Path:
        target_dir = self._config.build.target_dir
        if not target_dir.is_absolute():
            target_dir = self._root / target_dir
        out_dir = _PROFILE_OUTPUT_DIRS.get(request.profile, request.profile)
        return target_dir / out_dir / request.binary

    def plan(self, request: BuildRequest) -> BuildPlan:
        directory = self.artifact_dir(request)
        staged = directory / request.binary
        return BuildPlan(
            directory=directory,
            build_command=tuple(self.build_command(request)),
            source_binary=self.built_binary_path(request),
            staged_binary=staged,
            checksum_file=checksum_path_for(staged),
            version_file=directory / VERSION_FILENAME,
            extratag_file=directory / EXTRATAG_FILENAME,
        )

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def prepare_artifact_dir(self, request: BuildRequest) -> Result[Path, ArtifactIOError]:
        directory = self.artifact_dir(request)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(ArtifactIOError(path=directory, reason=e.strerror or str(e)))
        return Ok(directory)

    def determine_version(self) -> Result[str, GitFailed]:
        """Release tag containing HEAD, or "" when there is none."""
        match self._repo.release_tag():
            case Err(e):
                return Err(GitFailed(command=e.command, message=e.message, returncode=e.returncode))
            case Ok(tag):
                if tag is None:
                    self._console.warning("no release tag (v*) contains HEAD; VERSION will be empty")
                    return Ok("")
                return Ok(tag)

    def log_head(self) -> Result[str, GitFailed]:
        match self._repo.head_oneline():
            case Err(e):
                return Err(GitFailed(command=e.command, message=e.message, returncode=e.returncode))
            case Ok(line):
                self._console.print(line)
                return Ok(line)

    def invoke_build(self, request: BuildRequest) -> Result[None, BuildFailed]:
        cmd = self.build_command(request)
        self._console.print(" ".join(cmd), Style.DIM)

        started = time.monotonic()
        result = run_silent(cmd, cwd=self._root, timeout=self._config.timeouts.build)
        elapsed = time.monotonic() - started
        self._console.print(f"build took {elapsed:.1f}s", Style.DIM)

        if isinstance(result, Err):
            return Err(
                BuildFailed(
                    returncode=result.error.returncode,
                    command=tuple(cmd),
                    detail=result.error.stderr.strip(),
                )
            )
        return Ok(None)

    def stage(self, request: BuildRequest, directory: Path) -> Result[Path, ArtifactIOError]:
        """Copy the built binary into ``directory``, keeping its mode bits."""
        source = self.built_binary_path(request)
        if not source.is_file():
            return Err(ArtifactIOError(path=source, reason="built binary not found"))

        dest = directory / request.binary
        try:
            shutil.copy2(source, dest)
        except OSError as e:
            return Err(ArtifactIOError(path=dest, reason=e.strerror or str(e)))
        return Ok(dest)

    def write_checksum(self, staged: Path) -> Result[ChecksumFile, ArtifactIOError]:
        result = write_checksum_file(staged)
        if isinstance(result, Ok):
            self._console.print(result.value.line.rstrip("\n"))
        return result

    def derive_extra_tag(
        self,
        request: BuildRequest,
        staged: Path,
        *,
        version: str,
        digest: str,
    ) -> Result[str, VersionProbeFailed]:
        """Run ``<staged> --version`` and compose the extra tag."""
        probe = run(
            [str(staged), "--version"],
            cwd=staged.parent,
            timeout=self._config.timeouts.version,
        )
        if isinstance(probe, Err):
            return Err(
                VersionProbeFailed(
                    binary=staged,
                    returncode=probe.error.returncode,
                    stderr=probe.error.stderr.strip(),
                )
            )

        fragment = parse_version_fragment(request.binary, probe.value)
        if fragment is None:
            reported = probe.value.strip().splitlines()[0] if probe.value.strip() else ""
            self._console.warning(
                f"unrecognised '{request.binary} --version' output: {reported!r}; "
                "extra tag carries no version fragment"
            )
        return Ok(compose_extra_tag(version, fragment, digest))

    def persist_metadata(
        self,
        directory: Path,
        *,
        version: str,
        extra_tag: str,
    ) -> Result[None, ArtifactIOError]:
        for name, content in ((VERSION_FILENAME, version), (EXTRATAG_FILENAME, extra_tag)):
            path = directory / name
            try:
                atomic_write_text(path, content)
            except OSError as e:
                return Err(ArtifactIOError(path=path, reason=e.strerror or str(e)))
        return Ok(None)

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def run(
        self,
        request: BuildRequest,
        *,
        keep_going: bool = False,
    ) -> Result[ArtifactRecord, ReleaseError]:
        """Run every step in order, stopping at the first error."""
        dir_result = self.prepare_artifact_dir(request)
        if isinstance(dir_result, Err):
            return dir_result
        directory = dir_result.value
        self._console.print(f"Artifacts will be copied into {directory}")

        version_result = self.determine_version()
        if isinstance(version_result, Err):
            return version_result
        version = version_result.value

        head = self.log_head()
        if isinstance(head, Err):
            return head

        built = self.invoke_build(request)
        if isinstance(built, Err):
            if not keep_going:
                return built
            self._console.warning(
                f"build failed (exit {built.error.returncode}); continuing with --keep-going"
            )

        self._console.print(f"Artifact target: {directory}")

        staged_result = self.stage(request, directory)
        if isinstance(staged_result, Err):
            return staged_result
        staged = staged_result.value

        checksum_result = self.write_checksum(staged)
        if isinstance(checksum_result, Err):
            return checksum_result
        checksum = checksum_result.value

        tag_result = self.derive_extra_tag(
            request, staged, version=version, digest=checksum.digest
        )
        if isinstance(tag_result, Err):
            return tag_result
        extra_tag = tag_result.value

        self._console.print(f"{request.binary} version = {version} (EXTRATAG = {extra_tag})")

        persisted = self.persist_metadata(directory, version=version, extra_tag=extra_tag)
        if isinstance(persisted, Err):
            return persisted

        return Ok(
            ArtifactRecord(
                directory=directory,
                binary_path=staged,
                checksum_path=checksum.path,
                digest=checksum.digest,
                version=version,
                extra_tag=extra_tag,
            )
        )
