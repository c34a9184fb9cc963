"""
Tests for dialect routing and artifact emission (minerva_harvest/emit.py)

Run: python -m pytest tests/test_emit.py -q
"""

import json
from pathlib import Path

import pytest

from minerva_harvest.config import HarvestConfig
from minerva_harvest.emit import (
    compose_front_matter,
    emit_collections,
    emit_story,
    json_output_path,
    public_url,
    select_dialect,
    yaml_output_path,
)
from minerva_harvest.errors import MissingImagePathError, UnsupportedDialectError
from minerva_harvest.models import Dialect, Image, StoryEntry

HREF = "https://example.org/lin-2018/fig1.html"


@pytest.fixture
def config(tmp_path):
    return HarvestConfig(json_root=tmp_path / "_data", yaml_root=tmp_path / "data")


class TestDialect:
    def test_channels_selects_1_5(self):
        assert select_dialect({"Images": [], "Channels": []}) is Dialect.V1_5

    def test_absent_channels_selects_1_0(self):
        assert select_dialect({"Images": []}) is Dialect.V1_0

    def test_empty_channels_still_1_5(self):
        assert select_dialect({"Channels": None}) is Dialect.V1_5


class TestPaths:
    def test_1_0_layout(self):
        path = json_output_path(Path("_data"), Dialect.V1_0, "lin-2018", "fig1")
        assert path == Path("_data/config-lin-2018/fig1.json")

    def test_1_5_layout(self):
        path = json_output_path(Path("_data"), Dialect.V1_5, "lin-2018", "fig1")
        assert path == Path("_data/config-lin-2018/fig1/exhibit.json")

    def test_unknown_dialect(self):
        with pytest.raises(UnsupportedDialectError):
            json_output_path(Path("_data"), "minerva-2-0", "lin-2018", "fig1")

    def test_yaml_layout(self):
        assert yaml_output_path(Path("data"), "lin-2018", "fig1") == Path("data/lin-2018/fig1.md")

    def test_public_url(self):
        assert public_url("https://www.cycif.org/", "lin-2018", "fig1") == "https://www.cycif.org/lin-2018/fig1"


class TestFrontMatter:
    def test_1_0(self):
        image = Image(path="https://example.org/lin-2018/tiles", description="Tonsil")
        text = compose_front_matter(Dialect.V1_0, "lin-2018", "fig1", image)
        assert text == (
            "---\n"
            'title: "Tonsil"\n'
            "image: https://example.org/lin-2018/tiles\n"
            "layout: osd-exhibit\n"
            "paper: config-lin-2018\n"
            "figure: fig1\n"
            "---\n"
        )

    def test_1_5(self):
        image = Image(path="https://example.org/lin-2018/tiles", description="Tonsil")
        text = compose_front_matter(Dialect.V1_5, "lin-2018", "fig1", image)
        assert text == (
            "---\n"
            'title: "Tonsil"\n'
            "image: https://example.org/lin-2018/tiles\n"
            "layout: minerva-1-5\n"
            "exhibit: config-lin-2018/fig1\n"
            "---\n"
        )

    def test_title_falls_back_to_story_name(self):
        text = compose_front_matter(Dialect.V1_0, "c", "fig1", Image(path="p", description=""))
        assert 'title: "fig1"' in text

    def test_image_line_omitted_without_path(self):
        text = compose_front_matter(Dialect.V1_0, "c", "fig1", Image(path="", description="d"))
        assert "image:" not in text

    def test_numeric_description_used_as_title(self):
        image = Image.from_record({"Path": "p", "Description": 2019})
        text = compose_front_matter(Dialect.V1_0, "c", "f", image)
        assert 'title: "2019"' in text

    def test_title_quotes_escaped(self):
        text = compose_front_matter(Dialect.V1_0, "c", "f", Image(path="p", description='A "B"'))
        assert 'title: "A \\"B\\""' in text


class TestEmitStory:
    def test_writes_1_0_artifacts(self, config):
        exhibit = {"Name": "Tonsil", "Images": [{"Path": "https://example.org/t", "Description": "Tonsil"}]}
        emitted = emit_story("lin-2018", "fig1", StoryEntry(exhibit=exhibit, href=HREF), config)

        assert emitted.dialect is Dialect.V1_0
        assert emitted.json_path == config.json_root / "config-lin-2018" / "fig1.json"
        assert json.loads(emitted.json_path.read_text(encoding="utf-8")) == exhibit
        assert emitted.yaml_path.read_text(encoding="utf-8").startswith('---\ntitle: "Tonsil"\n')
        assert emitted.progress_line == f"{HREF},https://www.cycif.org/lin-2018/fig1"

    def test_writes_1_5_artifacts(self, config):
        exhibit = {"Images": [{"Path": "https://example.org/t"}], "Channels": []}
        emitted = emit_story("lin-2018", "fig1", StoryEntry(exhibit=exhibit, href=HREF), config)
        assert emitted.json_path == config.json_root / "config-lin-2018" / "fig1" / "exhibit.json"
        assert emitted.json_path.exists()
        assert "layout: minerva-1-5" in emitted.yaml_path.read_text(encoding="utf-8")

    def test_json_is_compact_and_keeps_unicode(self, config):
        exhibit = {"Images": [{"Path": "https://example.org/t", "Description": "Größe"}]}
        emitted = emit_story("c", "s", StoryEntry(exhibit=exhibit, href=HREF), config)
        assert emitted.json_path.read_text(encoding="utf-8") == (
            '{"Images":[{"Path":"https://example.org/t","Description":"Größe"}]}'
        )

    def test_missing_image_path(self, config):
        entry = StoryEntry(exhibit={"Images": [{"Description": "d"}]}, href=HREF)
        with pytest.raises(MissingImagePathError):
            emit_story("c", "s", entry, config)


class TestEmitCollections:
    def test_numeric_description_does_not_abort(self, config):
        exhibit = {"Images": [{"Path": "https://e.org/t", "Description": 7}]}
        emitted = emit_collections({"c": {"s": StoryEntry(exhibit=exhibit, href=HREF)}}, config)
        assert [story.name for story in emitted] == ["s"]
        assert 'title: "7"' in (config.yaml_root / "c" / "s.md").read_text(encoding="utf-8")

    def test_broken_story_skipped_others_written(self, config):
        collections = {
            "c": {
                "bad": StoryEntry(exhibit={"Images": [{}]}, href=HREF),
                "good": StoryEntry(exhibit={"Images": [{"Path": "https://e.org/t"}]}, href=HREF),
            }
        }
        emitted = emit_collections(collections, config)
        assert [story.name for story in emitted] == ["good"]
        assert not (config.yaml_root / "c" / "bad.md").exists()

    def test_uncollected_stories_use_fallback(self, config):
        collections = {None: {"s": StoryEntry(exhibit={"Images": [{"Path": "https://e.org/t"}]}, href=HREF)}}
        emitted = emit_collections(collections, config)
        assert emitted[0].collection == "undefined"
        assert (config.yaml_root / "undefined" / "s.md").exists()
