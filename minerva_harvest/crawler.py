"""High-level orchestration for fetching documents and emitting exhibits."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from playwright.async_api import (
    APIRequestContext,
    Error as PlaywrightError,
    async_playwright,
)

from .config import RESERVED_SEGMENTS, HarvestConfig
from .content import extract_script_text
from .emit import emit_collections
from .errors import DocumentError, FetchError
from .extraction import extract_exhibit, parse_script
from .grouping import group_collections
from .models import EmittedStory, RemoteExhibit, Story
from .naming import create_identity
from .proofread import proofread_exhibit

logger = logging.getLogger("minerva_harvest")


def read_locations(path: Path) -> List[str]:
    """Read one document location per line, ignoring blanks and comments."""
    locations: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            locations.append(line)
    return locations


class PlaywrightFetcher:
    """Fetch documents and exhibit JSON through a Playwright request context."""

    def __init__(self, request: APIRequestContext, timeout: float) -> None:
        self._request = request
        self.timeout = timeout

    async def _get(self, url: str):
        response = await self._request.get(url, timeout=self.timeout * 1000)
        if not response.ok:
            raise FetchError(f"{url} returned HTTP {response.status}")
        return response

    async def fetch_text(self, url: str) -> str:
        logger.info("Loading %s", url)
        response = await self._get(url)
        return await response.text()

    async def fetch_json(self, url: str) -> Any:
        logger.info("Loading exhibit %s", url)
        response = await self._get(url)
        try:
            return await response.json()
        except ValueError as exc:
            raise FetchError(f"{url} did not return JSON: {exc}") from exc


async def harvest_story(
    location: str,
    fetcher: Any,
    reserved: Iterable[str] = RESERVED_SEGMENTS,
) -> Optional[Story]:
    """Run the per-document pipeline; failures are logged and yield ``None``.

    ``fetcher`` is anything with ``fetch_text`` and ``fetch_json`` coroutines.
    """
    try:
        identity = create_identity(location, reserved)
        html = await fetcher.fetch_text(location)
        statements = parse_script(extract_script_text(html))
        raw_exhibit = extract_exhibit(statements, location)
        if isinstance(raw_exhibit, RemoteExhibit):
            raw_exhibit = await fetcher.fetch_json(raw_exhibit.url)
        exhibit = proofread_exhibit(raw_exhibit, identity.href)
    except DocumentError as exc:
        logger.error("Skipping %s: %s", location, exc)
        return None
    except PlaywrightError as exc:
        logger.error("Failed to fetch %s: %s", location, exc)
        return None
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error harvesting %s", location)
        return None
    return Story(identity=identity, exhibit=exhibit)


async def harvest_stories(
    locations: List[str],
    fetcher: Any,
    reserved: Iterable[str] = RESERVED_SEGMENTS,
) -> List[Story]:
    """Harvest every location concurrently, keeping input order."""
    reserved = frozenset(reserved)
    results = await asyncio.gather(
        *(harvest_story(location, fetcher, reserved) for location in locations)
    )
    return [story for story in results if story is not None]


async def run_harvester(locations: List[str], config: HarvestConfig) -> List[EmittedStory]:
    """Fetch all documents, then group and emit once every one has resolved."""
    async with async_playwright() as playwright:
        request = await playwright.request.new_context()
        try:
            fetcher = PlaywrightFetcher(request, config.request_timeout)
            stories = await harvest_stories(locations, fetcher, config.reserved_segments)
        finally:
            await request.dispose()

    collections = group_collections(stories)
    return emit_collections(collections, config)
