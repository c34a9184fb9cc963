"""Dialect routing and JSON/front-matter artifact emission."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from .config import HarvestConfig
from .errors import DocumentError, MissingImagePathError, UnsupportedDialectError
from .grouping import Collections
from .models import Dialect, EmittedStory, Exhibit, Image, StoryEntry
from .proofread import require_images
from .utils import quote_scalar

logger = logging.getLogger("minerva_harvest.emit")


def select_dialect(exhibit: Exhibit) -> Dialect:
    """Only the presence of ``Channels`` distinguishes 1.5 exhibits."""
    return Dialect.V1_5 if "Channels" in exhibit else Dialect.V1_0


def json_output_path(json_root: Path, dialect: Dialect, collection: str, name: str) -> Path:
    config_dir = json_root / f"config-{collection}"
    if dialect is Dialect.V1_0:
        return config_dir / f"{name}.json"
    if dialect is Dialect.V1_5:
        return config_dir / name / "exhibit.json"
    raise UnsupportedDialectError(f"unsupported: {dialect}")


def yaml_output_path(yaml_root: Path, collection: str, name: str) -> Path:
    return yaml_root / collection / f"{name}.md"


def public_url(domain: str, collection: str, name: str) -> str:
    return f"{domain.rstrip('/')}/{collection}/{name}"


def compose_front_matter(dialect: Dialect, collection: str, name: str, image: Image) -> str:
    """Generate the Jekyll front matter that selects the exhibit layout."""
    lines = ["---", f"title: {quote_scalar(image.description or name)}"]
    if image.path:
        lines.append(f"image: {image.path}")
    if dialect is Dialect.V1_0:
        lines.append("layout: osd-exhibit")
        lines.append(f"paper: config-{collection}")
        lines.append(f"figure: {name}")
    elif dialect is Dialect.V1_5:
        lines.append("layout: minerva-1-5")
        lines.append(f"exhibit: config-{collection}/{name}")
    else:
        raise UnsupportedDialectError(f"unsupported: {dialect}")
    lines.append("---\n")
    return "\n".join(lines)


def emit_story(
    collection: str,
    name: str,
    entry: StoryEntry,
    config: HarvestConfig,
) -> EmittedStory:
    """Write the JSON exhibit and front-matter stub for one story."""
    exhibit = entry.exhibit
    image = Image.from_record(require_images(exhibit)[0])
    if not image.path:
        raise MissingImagePathError("missing image path")

    dialect = select_dialect(exhibit)
    json_path = json_output_path(config.json_root, dialect, collection, name)
    yaml_path = yaml_output_path(config.yaml_root, collection, name)

    json_path.parent.mkdir(parents=True, exist_ok=True)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(
        json.dumps(exhibit, ensure_ascii=False, separators=(",", ":")),
        encoding="utf-8",
    )
    yaml_path.write_text(
        compose_front_matter(dialect, collection, name, image),
        encoding="utf-8",
    )
    logger.info("Saved %s exhibit to %s", dialect.value, json_path)

    return EmittedStory(
        collection=collection,
        name=name,
        href=entry.href,
        public_url=public_url(config.public_domain, collection, name),
        dialect=dialect,
        json_path=json_path,
        yaml_path=yaml_path,
    )


def _collection_dir(key: Optional[str], config: HarvestConfig) -> str:
    return key if key is not None else config.fallback_collection


def emit_collections(collections: Collections, config: HarvestConfig) -> List[EmittedStory]:
    """Emit every grouped story; stories with broken images are skipped."""
    emitted: List[EmittedStory] = []
    for key, entries in collections.items():
        collection = _collection_dir(key, config)
        for name, entry in entries.items():
            try:
                emitted.append(emit_story(collection, name, entry, config))
            except DocumentError as exc:
                logger.error("Skipping %s (%s/%s): %s", entry.href, collection, name, exc)
    return emitted
