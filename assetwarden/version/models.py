"""Result types for version ordering."""

from __future__ import annotations

from enum import Enum, IntEnum


class Ordering(IntEnum):
    """Three-way comparison result of two semantic versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class VersionStatus(str, Enum):
    """How the local assets' version relates to the default assets' version."""

    SAME = "same"
    OLDER = "older"
    NEWER = "newer"
