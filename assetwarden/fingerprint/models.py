"""Data models for content fingerprinting."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

_SHA256_RE = re.compile(r"[a-f0-9]{64}")

DEFAULT_INCLUDE = ("*.js", "package.json")
# Deployment-tool scratch state and installed dependencies
DEFAULT_EXCLUDE = (".serverless", "node_modules")


@dataclass(frozen=True)
class FingerprintPolicy:
    """Which files count toward a fingerprint.

    ``include`` globs are matched against file names; ``exclude`` names are
    directories pruned at any depth.
    """

    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", tuple(self.include))
        object.__setattr__(self, "exclude", tuple(self.exclude))
        if not self.include:
            raise ValueError("include must name at least one file pattern")


@dataclass(frozen=True)
class FingerprintNode:
    """A hashed file, or a directory with the relative paths of its children."""

    path: str
    hash: str
    children: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if not _SHA256_RE.fullmatch(self.hash):
            raise ValueError(f"hash must be 64-char hex, got {self.hash!r}")

    @property
    def is_dir(self) -> bool:
        return bool(self.children)


@runtime_checkable
class ContentHasher(Protocol):
    """Produces a stable digest of a directory under a policy."""

    def fingerprint(self, root: str | Path, policy: FingerprintPolicy) -> str: ...
