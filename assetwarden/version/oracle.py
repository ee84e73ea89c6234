"""Reads asset bundle versions and orders them by semver precedence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import semver

from assetwarden.errors import (
    InternalConsistencyError,
    InvalidVersionError,
    MetadataParseError,
    MetadataReadError,
)
from assetwarden.version.models import Ordering, VersionStatus

logger = logging.getLogger(__name__)

# Legacy bundles shipped before versions were tagged still take part in comparisons
BASELINE_VERSION = "0.0.0"


@runtime_checkable
class VersionComparator(Protocol):
    """Three-way ordering of two version strings."""

    def __call__(self, a: str, b: str) -> Ordering: ...


def semver_compare(a: str, b: str) -> Ordering:
    """Order *a* against *b* by semantic-versioning precedence.

    Pre-release versions sort before their release, and build metadata is
    ignored, so ``1.0.0+build.7`` and ``1.0.0`` are EQUAL.
    """
    try:
        left = semver.Version.parse(a)
    except (TypeError, ValueError) as e:
        raise InvalidVersionError(a, e) from e
    try:
        right = semver.Version.parse(b)
    except (TypeError, ValueError) as e:
        raise InvalidVersionError(b, e) from e
    return Ordering(left.compare(right))


def coerce_ordering(result: object, path: str | Path) -> Ordering:
    """Validate a comparator result, rejecting anything outside the three values."""
    if isinstance(result, bool):
        raise InternalConsistencyError(
            path, ValueError(f"comparator returned non-ordering value {result!r}")
        )
    try:
        return Ordering(result)
    except (TypeError, ValueError) as e:
        raise InternalConsistencyError(
            path, ValueError(f"comparator returned non-ordering value {result!r}")
        ) from e


def parse_version(
    raw: str | bytes, tree_path: str | Path, baseline: str = BASELINE_VERSION
) -> str:
    """Extract the ``version`` field from metadata file contents.

    A missing, null or empty ``version`` falls back to *baseline*. Contents
    that are not a JSON object raise MetadataParseError.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MetadataParseError(tree_path, e) from e
    if not isinstance(data, dict):
        raise MetadataParseError(
            tree_path, TypeError(f"expected a JSON object, got {type(data).__name__}")
        )

    version = data.get("version")
    if version is None or version == "":
        return baseline
    if not isinstance(version, str):
        raise MetadataParseError(
            tree_path, TypeError(f"version must be a string, got {version!r}")
        )
    return version


class VersionOracle:
    """Reads the semantic version of asset trees and orders pairs of them.

    The comparator is injected so callers can substitute deterministic fakes;
    production code uses :func:`semver_compare`.
    """

    def __init__(
        self,
        metadata_file: str = "package.json",
        baseline: str = BASELINE_VERSION,
        comparator: VersionComparator = semver_compare,
        default_assets: Path | None = None,
    ) -> None:
        self.metadata_file = metadata_file
        self.baseline = baseline
        self.comparator = comparator
        self.default_assets = default_assets

    def read_version(self, tree_path: str | Path) -> str:
        """Return the version declared in *tree_path*'s metadata file."""
        tree_path = Path(tree_path)
        metadata_path = tree_path / self.metadata_file
        try:
            raw = metadata_path.read_bytes()
        except OSError as e:
            raise MetadataReadError(tree_path, e) from e

        version = parse_version(raw, tree_path, self.baseline)
        logger.debug("read version %s from %s", version, metadata_path)
        return version

    def compare(self, a: str, b: str) -> Ordering:
        return self.comparator(a, b)

    # ------------------------------------------------------------------
    # Default vs. local assets
    # ------------------------------------------------------------------

    def local_version(self, local_path: str | Path) -> str:
        return self.read_version(local_path)

    def default_version(self) -> str:
        if self.default_assets is None:
            raise ValueError("No default assets directory configured")
        return self.read_version(self.default_assets)

    def check_local_version(self, local_path: str | Path) -> VersionStatus:
        """Compare local assets against the default assets by version only."""
        return self.version_status(
            self.default_version(), self.local_version(local_path), local_path
        )

    def version_status(
        self, default_version: str, local_version: str, local_path: str | Path
    ) -> VersionStatus:
        """Relate two already-read versions.

        Returns OLDER when the default assets are newer than the local ones,
        NEWER when the local assets are ahead, SAME otherwise.
        """
        ordering = coerce_ordering(
            self.compare(default_version, local_version), local_path
        )

        if ordering is Ordering.GREATER:
            return VersionStatus.OLDER
        if ordering is Ordering.LESS:
            return VersionStatus.NEWER
        return VersionStatus.SAME
