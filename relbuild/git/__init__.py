"""Git queries used to derive release versions.

Usage:
    from relbuild.git import Repository

    repo = Repository(Path.cwd())
    match repo.release_tag():
        case Ok(tag):
            version = tag or ""
"""

from relbuild.git.repository import (
    RELEASE_TAG_RE,
    GitError,
    Repository,
    select_release_tag,
)

__all__ = [
    "GitError",
    "RELEASE_TAG_RE",
    "Repository",
    "select_release_tag",
]
