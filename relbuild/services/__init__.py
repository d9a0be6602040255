"""Release services.

Services implement the release pipeline, coordinating between the core
types (core/) and infrastructure (git/, platform/).
"""

from relbuild.services.builder import (
    ArtifactRecord,
    BuildPlan,
    BuildRequest,
    ReleaseBuilder,
)
from relbuild.services.checksum import verify_checksum_file, write_checksum_file
from relbuild.services.release_errors import ReleaseError

__all__ = [
    # Builder
    "ArtifactRecord",
    "BuildPlan",
    "BuildRequest",
    "ReleaseBuilder",
    # Checksums
    "verify_checksum_file",
    "write_checksum_file",
    # Errors
    "ReleaseError",
]
