"""Error taxonomy for version reads, fingerprinting and integrity records."""

from __future__ import annotations

from pathlib import Path


class AssetWardenError(Exception):
    """Wraps an underlying failure with the path it happened on."""

    action = "process"

    def __init__(self, path: str | Path, cause: BaseException | None = None) -> None:
        self.path = str(path)
        self.cause = cause
        msg = f"Failed to {self.action} {self.path}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
        self.__cause__ = cause


class MetadataReadError(AssetWardenError):
    """The metadata file of an asset tree is missing or unreadable."""

    action = "read metadata for assets in"


class MetadataParseError(AssetWardenError):
    """The metadata file exists but is not a JSON object."""

    action = "parse metadata for assets in"


class HashComputeError(AssetWardenError):
    action = "compute content fingerprint of"


class RecordReadError(AssetWardenError):
    """The integrity record is missing or corrupt when a comparison needs it."""

    action = "read integrity file at"


class RecordWriteError(AssetWardenError):
    action = "write integrity file at"


class InternalConsistencyError(AssetWardenError):
    """A comparator produced a result outside {LESS, EQUAL, GREATER}."""

    action = "order versions for"


class InvalidVersionError(ValueError):
    """A version string does not follow semantic versioning."""

    def __init__(self, version: str, cause: BaseException | None = None) -> None:
        self.version = version
        super().__init__(f"Invalid semantic version {version!r}")
        self.__cause__ = cause
