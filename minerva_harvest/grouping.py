"""Group stories into collections keyed by story name."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from .errors import DuplicateStoryNameError
from .models import Story, StoryEntry

logger = logging.getLogger("minerva_harvest.grouping")

Collections = Dict[Optional[str], Dict[str, StoryEntry]]


def group_collections(stories: Iterable[Story]) -> Collections:
    """Index every story under its collection, rejecting repeated names."""
    collections: Collections = {}
    for story in stories:
        collection = collections.setdefault(story.collection, {})
        if story.name in collection:
            raise DuplicateStoryNameError(story.collection, story.name)
        collection[story.name] = StoryEntry(exhibit=story.exhibit, href=story.href)

    for key, entries in collections.items():
        logger.debug("%s: %s", key, ",".join(entries))
    return collections
