"""
Settings for mention resolution.
Uses Pydantic for validation; YAML files are read with PyYAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 300.0  # 5 minutes
DEFAULT_SECTION = "resource_mentions"


class MentionSettings(BaseModel):
    """Tunables for a MentionResolver instance."""

    model_config = ConfigDict(extra="ignore")

    cache_enabled: bool = Field(default=True, description="Memoize resolved resources")
    cache_ttl: float = Field(
        default=DEFAULT_CACHE_TTL, gt=0, description="Seconds a cached resource stays valid"
    )
    cache_max_entries: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound on cached entries; None leaves the cache unbounded",
    )
    concurrent: bool = Field(
        default=True, description="Resolve the mentions of one text concurrently"
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MentionSettings:
        """Build settings from a plain dict, ignoring unknown keys."""
        return cls.model_validate(data or {})


def load_settings(path: Path, section: str = DEFAULT_SECTION) -> MentionSettings:
    """Load settings from a section of a YAML file.

    Args:
        path: Path to the YAML settings file.
        section: Top-level key holding the mention settings.

    Returns:
        MentionSettings; defaults when the file or section is missing.

    Raises:
        yaml.YAMLError: If the file contains invalid YAML.
        pydantic.ValidationError: If a setting has an invalid value.
    """
    if not path.exists():
        logger.debug(f"Settings file not found at {path}, using defaults")
        return MentionSettings()

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {path}: top level is not a mapping")
        return MentionSettings()

    return MentionSettings.from_dict(data.get(section))
