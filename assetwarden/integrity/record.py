"""Reading and writing the .integrity.yml record."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from assetwarden.errors import RecordReadError, RecordWriteError
from assetwarden.integrity.models import IntegrityRecord

logger = logging.getLogger(__name__)

RECORD_FILE = ".integrity.yml"


def dump_record(record: IntegrityRecord) -> str:
    """Serialize a record as YAML with a fixed key order."""
    return yaml.safe_dump(
        {"hash": record.hash, "semver": record.semver},
        default_flow_style=False,
        sort_keys=False,
    )


def load_record(path: Path) -> IntegrityRecord:
    """Read and validate the record at *path*."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise RecordReadError(path, e) from e
    except yaml.YAMLError as e:
        raise RecordReadError(path, e) from e

    if not isinstance(raw, dict):
        raise RecordReadError(path, TypeError("integrity file must hold a mapping"))
    try:
        return IntegrityRecord.model_validate(raw)
    except ValidationError as e:
        raise RecordReadError(path, e) from e


def save_record(path: Path, record: IntegrityRecord) -> None:
    """Overwrite *path* with *record*."""
    content = dump_record(record)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise RecordWriteError(path, e) from e
    logger.info("wrote %s (hash=%s, semver=%s)", path, record.hash, record.semver)
