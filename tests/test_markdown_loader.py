"""Tests for Markdown front-matter loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from docscout.ingestion.markdown_loader import load_document, split_front_matter


class TestSplitFrontMatter:
    """Test split_front_matter function."""

    def test_with_front_matter(self) -> None:
        """Should separate YAML metadata from the body."""
        metadata, body = split_front_matter("---\ntitle: Routing\norder: 2\n---\nBody text\n")

        assert metadata == {"title": "Routing", "order": 2}
        assert body == "Body text\n"

    def test_without_front_matter(self) -> None:
        """Should return the whole text as body."""
        metadata, body = split_front_matter("# Heading\n\nText")

        assert metadata == {}
        assert body == "# Heading\n\nText"

    def test_nested_and_dates(self) -> None:
        """Should keep nested values and normalise dates to ISO strings."""
        text = "---\nupdated: 2024-01-02\nsidebar:\n  label: Nav\n  hidden: false\ntags: [a, b]\n---\nx"

        metadata, _ = split_front_matter(text)

        assert metadata["updated"] == "2024-01-02"
        assert metadata["sidebar"] == {"label": "Nav", "hidden": False}
        assert metadata["tags"] == ["a", "b"]

    def test_non_mapping_front_matter(self) -> None:
        """Should ignore front-matter that is not a mapping."""
        metadata, body = split_front_matter("---\n- one\n- two\n---\nBody")

        assert metadata == {}
        assert body == "Body"

    def test_invalid_yaml(self) -> None:
        """Should raise for malformed YAML."""
        with pytest.raises(yaml.YAMLError):
            split_front_matter("---\ntitle: [unclosed\n---\nBody")


class TestLoadDocument:
    """Test load_document function."""

    def test_load_with_metadata(self, tmp_path: Path) -> None:
        """Should classify the path and pass custom fields through."""
        path = tmp_path / "versions" / "v51.0.0" / "camera.md"
        path.parent.mkdir(parents=True)
        path.write_text("---\ntitle: Camera\ndescription: Photos\nplatforms: [ios, android]\n---\nBody")

        doc = load_document(path, tmp_path)

        assert doc.path == "versions/v51.0.0/camera.md"
        assert doc.title == "Camera"
        assert doc.content == "Body"
        assert doc.section == "versions"
        assert doc.version == "v51.0.0"
        assert doc.metadata["platforms"] == ["ios", "android"]
        assert doc.metadata["section"] == "versions"
        assert doc.metadata["version"] == "v51.0.0"

    def test_title_falls_back_to_stem(self, tmp_path: Path) -> None:
        """Should use the filename without extension as title."""
        path = tmp_path / "guides" / "routing.mdx"
        path.parent.mkdir()
        path.write_text("No front-matter here.")

        doc = load_document(path, tmp_path)

        assert doc.title == "routing"
        assert doc.section == "guides"
        assert doc.version is None

    def test_metadata_section_kept_when_path_has_none(self, tmp_path: Path) -> None:
        """Should keep a declared section in metadata without classifying it."""
        path = tmp_path / "misc.md"
        path.write_text("---\nsection: extras\n---\nBody")

        doc = load_document(path, tmp_path)

        assert doc.section is None
        assert doc.metadata["section"] == "extras"
