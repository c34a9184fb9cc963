"""Derive story identities from document locations."""

from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import urldefrag, urlsplit

from .config import RESERVED_SEGMENTS
from .models import Identity

INDEX_PAGE = "index.html"


def _select_collection(candidates: List[str], reserved: Iterable[str]) -> Optional[str]:
    """Return the last segment that is neither dotted nor reserved."""
    reserved_lower = {word.lower() for word in reserved}
    for segment in reversed(candidates):
        if not segment or "." in segment:
            continue
        if segment.lower() in reserved_lower:
            continue
        return segment
    return None


def create_identity(location: str, reserved: Iterable[str] = RESERVED_SEGMENTS) -> Identity:
    """Build the collection/name identity for a document location.

    ``.../<name>/index.html`` (or a bare ``.../<name>/``) names the story after
    its directory; any other page is named after the stem of its filename.
    The collection is the nearest enclosing directory that is not reserved.
    """
    href, _fragment = urldefrag(location.strip())
    path = urlsplit(href).path or "/"
    segments = path.split("/")

    if segments[-1] in (INDEX_PAGE, ""):
        directories = segments[:-1]
        name = directories[-1] if directories else ""
        candidates = directories[:-1]
    else:
        name = segments[-1].split(".")[0]
        candidates = segments[:-1]

    return Identity(
        href=href,
        collection=_select_collection(candidates, reserved),
        name=name,
    )
