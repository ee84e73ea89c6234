import semver
from pydantic import BaseModel, Field, field_validator
from typing import Literal

from assetwarden.fingerprint.models import DEFAULT_EXCLUDE, DEFAULT_INCLUDE


class AssetsConfig(BaseModel):
    metadata_file: str = "package.json"
    record_file: str = ".integrity.yml"
    assets_dir: str = "lib/lambda"
    default_assets: str | None = None
    baseline_version: str = "0.0.0"

    @field_validator("metadata_file", "record_file", "assets_dir")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("baseline_version")
    @classmethod
    def _semver(cls, v: str) -> str:
        if not semver.Version.is_valid(v):
            raise ValueError(f"not a semantic version: {v!r}")
        return v


class FingerprintConfig(BaseModel):
    include: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE), min_length=1)
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))


class WardenConfig(BaseModel):
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    fingerprint: FingerprintConfig = Field(default_factory=FingerprintConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
