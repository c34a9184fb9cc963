"""Data models used throughout the harvesting pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# Exhibits stay open-ended mappings until the Images invariant is confirmed.
Exhibit = Dict[str, Any]


@dataclass(frozen=True)
class Identity:
    """Hierarchical identity derived from a document location."""

    href: str
    collection: Optional[str]
    name: str


@dataclass(frozen=True)
class Image:
    """Narrowed view of an exhibit image record."""

    path: str
    description: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Image":
        return cls(
            path=str(record.get("Path") or ""),
            description=str(record.get("Description") or ""),
        )


@dataclass(frozen=True)
class Story:
    """A successfully harvested document and its proofread exhibit."""

    identity: Identity
    exhibit: Exhibit

    @property
    def collection(self) -> Optional[str]:
        return self.identity.collection

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def href(self) -> str:
        return self.identity.href


@dataclass(frozen=True)
class StoryEntry:
    """What a collection keeps for each story name."""

    exhibit: Exhibit
    href: str


@dataclass(frozen=True)
class InlineExhibit:
    """Exhibit written as an object literal inside the configuring call."""

    exhibit: Exhibit


@dataclass(frozen=True)
class RemoteExhibit:
    """Exhibit referenced by URL from the configuring call."""

    url: str


CalledExhibit = Union[InlineExhibit, RemoteExhibit]


class Dialect(Enum):
    """Output dialect; the value doubles as the Jekyll layout family."""

    V1_0 = "minerva-1-0"
    V1_5 = "minerva-1-5"


@dataclass
class EmittedStory:
    """Paths and public address of a story written to disk."""

    collection: str
    name: str
    href: str
    public_url: str
    dialect: Dialect
    json_path: Path
    yaml_path: Path

    @property
    def progress_line(self) -> str:
        return f"{self.href},{self.public_url}"
