"""Error codes for CLI exit status.

Each failure class of the release pipeline maps to one of these codes so CI
jobs can tell a bad invocation apart from a broken build or a full disk.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (missing binary name, bad arguments)
    - 2: Environment error (git unavailable, invalid config)
    - 3: Build error (build tool failed, binary misbehaved)
    - 5: I/O error (artifact directory or file operations)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
