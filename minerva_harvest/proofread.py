"""Repairs for known defects in harvested exhibits."""

from __future__ import annotations

from typing import Any, Dict, List

from .errors import MissingImagesError
from .models import Exhibit
from .utils import resolve_url


def require_images(exhibit: Exhibit) -> List[Any]:
    """Return ``Images`` after checking it is a non-empty list of records."""
    images = exhibit.get("Images") if isinstance(exhibit, dict) else None
    if not isinstance(images, list) or not images:
        raise MissingImagesError("missing images")
    if not isinstance(images[0], dict):
        raise MissingImagesError("first image is not a record")
    return images


def proofread_exhibit(exhibit: Exhibit, href: str) -> Exhibit:
    """Return a copy of ``exhibit`` with its first image repaired.

    The first image gets the exhibit ``Name`` as a fallback description and
    an absolute path resolved against ``href``. Other images are untouched.
    """
    images = list(require_images(exhibit))
    image: Dict[str, Any] = dict(images[0])

    if not image.get("Description"):
        image["Description"] = exhibit.get("Name") or ""

    path = image.get("Path")
    if isinstance(path, str):
        image["Path"] = resolve_url(path, href)

    images[0] = image
    return {**exhibit, "Images": images}
