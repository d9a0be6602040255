"""Platform abstraction layer."""

from .files import atomic_write_text, sha256_file
from .process import ProcessError, run, run_silent

__all__ = [
    # files
    "atomic_write_text",
    "sha256_file",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
