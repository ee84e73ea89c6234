"""Drift resolution between shipped default assets and deployed local copies."""

from assetwarden.integrity import IntegrityRecord, IntegrityResolver, Outcome
from assetwarden.version import Ordering, VersionOracle, VersionStatus

__version__ = "0.1.0"

__all__ = [
    "IntegrityRecord",
    "IntegrityResolver",
    "Ordering",
    "Outcome",
    "VersionOracle",
    "VersionStatus",
]
