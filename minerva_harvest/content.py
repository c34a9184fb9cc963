"""HTML parsing and exhibit script discovery."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

from .errors import AmbiguousScriptError, MissingScriptError


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def locate_exhibit_script(soup: BeautifulSoup) -> Tag:
    """Find the single attribute-less ``<script>`` inside ``<body>``.

    Loader and analytics scripts always carry at least one attribute
    (``src``, ``type``, ``async``...), so the bare one holds the exhibit logic.
    """
    body = soup.body
    if body is None:
        raise MissingScriptError("document has no <body>")
    candidates = [tag for tag in body.find_all("script") if not tag.attrs]
    if not candidates:
        raise MissingScriptError("missing script tag")
    if len(candidates) > 1:
        raise AmbiguousScriptError(
            f"found {len(candidates)} attribute-less script tags in <body>"
        )
    return candidates[0]


def extract_script_text(html: str) -> str:
    """Return the source of the exhibit script embedded in ``html``."""
    script = locate_exhibit_script(parse_document(html))
    text = "".join(script.strings).strip()
    if not text:
        raise MissingScriptError("exhibit script is empty")
    return text
