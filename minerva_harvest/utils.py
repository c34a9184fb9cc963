"""Utility helpers for URL and text normalization."""

from __future__ import annotations

import re
from urllib.parse import urljoin

TRAILING_SLASHES = re.compile(r"/+$")


def resolve_url(reference: str, base: str) -> str:
    """Resolve ``reference`` against ``base`` and drop trailing slashes."""
    return TRAILING_SLASHES.sub("", urljoin(base, reference))


def quote_scalar(value: str) -> str:
    """Double-quote a front-matter scalar, escaping what YAML requires."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'
