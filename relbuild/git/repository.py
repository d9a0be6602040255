"""Git repository abstraction.

Read-only queries the release builder needs: which tags contain HEAD and
what HEAD is. All operations return Result types.

Usage:
    repo = Repository(Path.cwd())

    match repo.release_tag():
        case Ok(tag):
            print(tag or "no release tag")
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relbuild.core.result import Err, Ok, Result
from relbuild.platform.process import ProcessError
from relbuild.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

# Release tags look like v1.2.3, v1.2.3-rc1, v2503 ...
RELEASE_TAG_RE = re.compile(r"^v\d")

__all__ = [
    "GitError",
    "RELEASE_TAG_RE",
    "Repository",
    "select_release_tag",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def select_release_tag(tags: list[str]) -> str | None:
    """Return the first tag that looks like a release tag, in git's order."""
    for tag in tags:
        if RELEASE_TAG_RE.match(tag):
            return tag
    return None


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository (any directory inside the work tree)
        timeout: Seconds allowed per git invocation
    """

    def __init__(self, path: Path, *, timeout: float = _GIT_TIMEOUT_SECONDS) -> None:
        self.path = path
        self.timeout = timeout

    def tags_containing_head(self) -> Result[list[str], GitError]:
        """List tags whose history contains HEAD.

        Runs `git tag -l --contains HEAD`.
        """
        result = self._run(["tag", "-l", "--contains", "HEAD"])
        match result:
            case Err(e):
                return Err(self._error("tag -l --contains HEAD", e))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def release_tag(self) -> Result[str | None, GitError]:
        """First release tag containing HEAD.

        Returns:
            Ok(tag), Ok(None) when no tag matches, Err(GitError) if git fails
        """
        return self.tags_containing_head().map(select_release_tag)

    def head_oneline(self) -> Result[str, GitError]:
        """HEAD commit as `<sha> <subject>` (`git log --pretty=oneline -n 1`)."""
        result = self._run(["log", "--pretty=oneline", "-n", "1"])
        match result:
            case Err(e):
                return Err(self._error("log --pretty=oneline -n 1", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=self.timeout
        )

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or f"git {command} failed",
            returncode=e.returncode,
        )
