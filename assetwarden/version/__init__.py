"""Version oracle: metadata version reads and semantic-version ordering."""

from assetwarden.version.models import Ordering, VersionStatus
from assetwarden.version.oracle import (
    BASELINE_VERSION,
    VersionComparator,
    VersionOracle,
    parse_version,
    semver_compare,
)

__all__ = [
    "BASELINE_VERSION",
    "Ordering",
    "VersionComparator",
    "VersionOracle",
    "VersionStatus",
    "parse_version",
    "semver_compare",
]
