"""Pydantic models for integrity records and classification results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from assetwarden.version.models import Ordering


class Outcome(str, Enum):
    """Relationship of a local asset tree to the default asset tree."""

    SYNCHRONIZED = "synchronized"
    SAFELY_UPGRADABLE = "safely-upgradable"
    DIVERGED = "diverged"


class IntegrityRecord(BaseModel):
    """Fingerprint and version of the default assets at their last refresh."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    hash: str = Field(min_length=1)
    semver: str = Field(min_length=1)


class ClassificationReport(BaseModel):
    """An outcome together with the evidence that produced it.

    ``candidate_hash`` and ``recorded_hash`` stay None when equal versions
    short-circuit the comparison.
    """

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    reference_version: str
    candidate_version: str
    ordering: Ordering
    candidate_hash: str | None = None
    recorded_hash: str | None = None
