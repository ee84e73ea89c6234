"""Content fingerprinting of asset trees."""

from assetwarden.fingerprint.models import (
    DEFAULT_EXCLUDE,
    DEFAULT_INCLUDE,
    ContentHasher,
    FingerprintNode,
    FingerprintPolicy,
)
from assetwarden.fingerprint.tree import (
    DirectoryHasher,
    FingerprintTree,
    compute_file_hash,
    compute_hash,
    compute_merkle_hash,
)

__all__ = [
    "DEFAULT_EXCLUDE",
    "DEFAULT_INCLUDE",
    "ContentHasher",
    "DirectoryHasher",
    "FingerprintNode",
    "FingerprintPolicy",
    "FingerprintTree",
    "compute_file_hash",
    "compute_hash",
    "compute_merkle_hash",
]
