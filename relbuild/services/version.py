"""Version strings derived from a built binary.

Binaries report themselves as ``<name> <semver>-<commit>-<target>``, e.g.
``polkadot 1.17.0-5c9c2c3e1a-x86_64-linux-gnu``. The ``<semver>-<commit>``
fragment goes into the extra tag together with a checksum prefix.
"""

from __future__ import annotations

import re

__all__ = [
    "CHECKSUM_PREFIX_LEN",
    "compose_extra_tag",
    "parse_version_fragment",
]

CHECKSUM_PREFIX_LEN = 8


def _fragment_re(binary: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(binary)} ([0-9.]+.*-[0-9a-f]{{7,13}})-.*$")


def parse_version_fragment(binary: str, output: str) -> str | None:
    """Extract ``<semver>-<commit>`` from ``<binary> --version`` output.

    Every line is tried; the first one that matches wins.
    """
    pattern = _fragment_re(binary)
    for line in output.splitlines():
        m = pattern.match(line.strip())
        if m is not None:
            return m.group(1)
    return None


def compose_extra_tag(version: str, fragment: str | None, digest: str) -> str:
    """``<version>-<fragment>-<digest prefix>``.

    Without a fragment the tag degrades to ``<version>-<digest prefix>``.
    The version slot is kept even when empty.
    """
    parts = [version]
    if fragment is not None:
        parts.append(fragment)
    parts.append(digest[:CHECKSUM_PREFIX_LEN])
    return "-".join(parts)
