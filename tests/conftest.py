"""Shared test fixtures for assetwarden."""

import json
from pathlib import Path

import pytest
from unittest.mock import MagicMock

from assetwarden.config.models import WardenConfig
from assetwarden.fingerprint import ContentHasher
from assetwarden.integrity import IntegrityRecord, save_record


def write_assets(root: Path, version: str | None = "1.0.0", handler: str = "module.exports = 1") -> Path:
    """Create a minimal asset bundle: package.json, handler.js, and ignorable extras."""
    root.mkdir(parents=True, exist_ok=True)
    metadata = {"name": "assets"}
    if version is not None:
        metadata["version"] = version
    (root / "package.json").write_text(json.dumps(metadata))
    (root / "handler.js").write_text(handler)
    (root / "serverless.yml").write_text("service: assets")
    return root


@pytest.fixture
def make_assets(tmp_path):
    def _make(name: str, version: str | None = "1.0.0", handler: str = "module.exports = 1") -> Path:
        return write_assets(tmp_path / name, version, handler)

    return _make


@pytest.fixture
def fake_hasher():
    """A ContentHasher whose fingerprint is set per test via return_value."""
    hasher = MagicMock(spec=ContentHasher)
    hasher.fingerprint.return_value = "H1"
    return hasher


@pytest.fixture
def record_for():
    def _record(tree: Path, hash: str, semver: str = "1.0.0") -> IntegrityRecord:
        record = IntegrityRecord(hash=hash, semver=semver)
        save_record(tree / ".integrity.yml", record)
        return record

    return _record


@pytest.fixture
def sample_config():
    return WardenConfig()
