"""Integrity resolution between default and local asset trees."""

from assetwarden.integrity.models import ClassificationReport, IntegrityRecord, Outcome
from assetwarden.integrity.record import RECORD_FILE, dump_record, load_record, save_record
from assetwarden.integrity.resolver import IntegrityResolver

__all__ = [
    "RECORD_FILE",
    "ClassificationReport",
    "IntegrityRecord",
    "IntegrityResolver",
    "Outcome",
    "dump_record",
    "load_record",
    "save_record",
]
