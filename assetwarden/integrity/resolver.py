"""Classifies local assets against default assets and refreshes the record."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from assetwarden.errors import HashComputeError
from assetwarden.fingerprint import ContentHasher, DirectoryHasher, FingerprintPolicy
from assetwarden.integrity.models import ClassificationReport, IntegrityRecord, Outcome
from assetwarden.integrity.record import RECORD_FILE, load_record, save_record
from assetwarden.version import Ordering, VersionOracle
from assetwarden.version.oracle import coerce_ordering

if TYPE_CHECKING:
    from assetwarden.config.models import WardenConfig

logger = logging.getLogger(__name__)


class IntegrityResolver:
    """Decides whether local assets are in sync, safely upgradable, or diverged.

    The reference tree is the default asset bundle shipped with the tool; it
    carries an integrity record (``.integrity.yml``) holding the fingerprint
    and version it had when last refreshed. The candidate tree is the copy
    deployed into a user's project.

    Equal declared versions are reported SYNCHRONIZED without hashing. Two
    trees that share a version but differ in content (a hand edit with no
    version bump) are therefore reported SYNCHRONIZED as well.
    """

    def __init__(
        self,
        oracle: VersionOracle | None = None,
        hasher: ContentHasher | None = None,
        policy: FingerprintPolicy | None = None,
        record_file: str = RECORD_FILE,
        assets_dir: str = "lib/lambda",
    ) -> None:
        self.oracle = oracle or VersionOracle()
        self.hasher = hasher or DirectoryHasher()
        self.policy = policy or FingerprintPolicy()
        self.record_file = record_file
        self.assets_dir = assets_dir

    @classmethod
    def from_config(cls, config: WardenConfig) -> IntegrityResolver:
        assets = config.assets
        default_assets = Path(assets.default_assets) if assets.default_assets else None
        return cls(
            oracle=VersionOracle(
                metadata_file=assets.metadata_file,
                baseline=assets.baseline_version,
                default_assets=default_assets,
            ),
            policy=FingerprintPolicy(
                include=config.fingerprint.include,
                exclude=config.fingerprint.exclude,
            ),
            record_file=assets.record_file,
            assets_dir=assets.assets_dir,
        )

    def record_path(self, reference_tree: str | Path) -> Path:
        return Path(reference_tree) / self.record_file

    def fingerprint(self, tree: str | Path) -> str:
        """Fingerprint *tree* under the resolver's policy."""
        try:
            return self.hasher.fingerprint(tree, self.policy)
        except HashComputeError:
            raise
        except Exception as e:
            raise HashComputeError(tree, e) from e

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def inspect(
        self, reference_tree: str | Path, candidate_tree: str | Path
    ) -> ClassificationReport:
        """Classify *candidate_tree* against *reference_tree* and keep the evidence."""
        reference_version = self.oracle.read_version(reference_tree)
        candidate_version = self.oracle.read_version(candidate_tree)
        ordering = coerce_ordering(
            self.oracle.compare(reference_version, candidate_version), reference_tree
        )

        if ordering is Ordering.EQUAL:
            report = ClassificationReport(
                outcome=Outcome.SYNCHRONIZED,
                reference_version=reference_version,
                candidate_version=candidate_version,
                ordering=ordering,
            )
        else:
            candidate_hash = self.fingerprint(candidate_tree)
            record = load_record(self.record_path(reference_tree))

            # Default assets newer and local assets untouched since deployment
            if ordering is Ordering.GREATER and record.hash == candidate_hash:
                outcome = Outcome.SAFELY_UPGRADABLE
            else:
                outcome = Outcome.DIVERGED

            report = ClassificationReport(
                outcome=outcome,
                reference_version=reference_version,
                candidate_version=candidate_version,
                ordering=ordering,
                candidate_hash=candidate_hash,
                recorded_hash=record.hash,
            )

        logger.info(
            "%s (%s) vs %s (%s): %s",
            reference_tree,
            reference_version,
            candidate_tree,
            candidate_version,
            report.outcome.value,
        )
        return report

    def classify(self, reference_tree: str | Path, candidate_tree: str | Path) -> Outcome:
        return self.inspect(reference_tree, candidate_tree).outcome

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self, reference_tree: str | Path) -> IntegrityRecord:
        """Recompute the reference tree's fingerprint and version and persist them.

        Run by the bundle maintainer before publishing. Nothing is written
        unless both the fingerprint and the version were obtained.
        """
        reference_tree = Path(reference_tree)
        record = IntegrityRecord(
            hash=self.fingerprint(reference_tree),
            semver=self.oracle.read_version(reference_tree),
        )
        save_record(self.record_path(reference_tree), record)
        return record

    def refresh_project(self, project_root: str | Path) -> IntegrityRecord:
        """Refresh the bundle kept at ``assets_dir`` inside a tool checkout."""
        return self.refresh(Path(project_root) / self.assets_dir)
