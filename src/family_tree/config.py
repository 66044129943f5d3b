"""Runtime configuration for the family tree.

Environment Variables:
    FAMILY_TREE_REFERENCE_YEAR: "Now" used to classify living people (default: current year)
    FAMILY_TREE_ADULT_AGE: Age at which a person counts as an adult (default 18)
    FAMILY_TREE_ID_PREFIX: Prefix of generated person identifiers (default "P")
    FAMILY_TREE_ID_WIDTH: Zero-padding of the identifier counter (default 3)
    FAMILY_TREE_LOG_LEVEL: structlog filtering level (default WARNING)
    FAMILY_TREE_RENDERER: Default tree renderer name (default "indented")

Example:
    >>> from family_tree.config import CONFIG
    >>> CONFIG.adult_age
    18
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import UTC, datetime


def _i(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except Exception:
        return default


def _s(name: str, default: str) -> str:
    value = os.getenv(name)
    return value.strip() if value and value.strip() else default


@dataclass(frozen=True)
class FamilyTreeConfig:
    """Settings read from the environment when the config is instantiated."""

    reference_year: int = field(
        default_factory=lambda: _i("FAMILY_TREE_REFERENCE_YEAR", datetime.now(UTC).year)
    )
    adult_age: int = field(default_factory=lambda: _i("FAMILY_TREE_ADULT_AGE", 18))

    # Identifier format: P001, P002, ...
    id_prefix: str = field(default_factory=lambda: _s("FAMILY_TREE_ID_PREFIX", "P"))
    id_width: int = field(default_factory=lambda: _i("FAMILY_TREE_ID_WIDTH", 3))

    log_level: str = field(default_factory=lambda: _s("FAMILY_TREE_LOG_LEVEL", "WARNING").upper())
    renderer: str = field(default_factory=lambda: _s("FAMILY_TREE_RENDERER", "indented").lower())


CONFIG = FamilyTreeConfig()
