"""Configuration objects and constants for the harvester."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

DEFAULT_PUBLIC_DOMAIN = "https://www.cycif.org"
DEFAULT_JSON_ROOT = Path("_data")
DEFAULT_YAML_ROOT = Path("data")
DEFAULT_URLS_FILE = Path("urls.txt")
DEFAULT_FALLBACK_COLLECTION = "undefined"
RESERVED_SEGMENTS: FrozenSet[str] = frozenset({"minerva", "minerva-story", "stories"})


@dataclass
class HarvestConfig:
    """Top-level settings that control fetching and artifact emission."""

    json_root: Path = DEFAULT_JSON_ROOT
    yaml_root: Path = DEFAULT_YAML_ROOT
    public_domain: str = DEFAULT_PUBLIC_DOMAIN
    request_timeout: float = 30.0
    reserved_segments: FrozenSet[str] = field(default_factory=lambda: RESERVED_SEGMENTS)
    fallback_collection: str = DEFAULT_FALLBACK_COLLECTION
