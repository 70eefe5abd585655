"""Tests for section and version classification."""

from __future__ import annotations

from docscout.index.classifier import classify_section, classify_version


class TestClassifySection:
    """Test classify_section function."""

    def test_known_section(self) -> None:
        assert classify_section(["guides", "routing.mdx"]) == "guides"

    def test_first_match_wins(self) -> None:
        assert classify_section(["versions", "v51.0.0", "reference", "camera.md"]) == "versions"

    def test_case_insensitive_keeps_original(self) -> None:
        assert classify_section(["Guides", "routing.md"]) == "Guides"

    def test_unknown(self) -> None:
        assert classify_section(["blog", "post.md"]) is None


class TestClassifyVersion:
    """Test classify_version function."""

    def test_semver_segment(self) -> None:
        assert classify_version(["versions", "v51.0.0", "camera.md"], {}) == "v51.0.0"

    def test_semver_without_prefix(self) -> None:
        assert classify_version(["50.0.1", "camera.md"], {}) == "50.0.1"

    def test_sentinel_segment(self) -> None:
        assert classify_version(["versions", "unversioned", "camera.md"], {}) == "unversioned"
        assert classify_version(["latest", "camera.md"], {}) == "latest"

    def test_semver_beats_sentinel(self) -> None:
        assert classify_version(["latest", "v49.0.0", "a.md"], {}) == "v49.0.0"

    def test_metadata_fallback(self) -> None:
        assert classify_version(["guides", "a.md"], {"version": "v52.0.0"}) == "v52.0.0"
        assert classify_version(["guides", "a.md"], {"version": 52}) == "52"

    def test_none(self) -> None:
        assert classify_version(["guides", "a.md"], {}) is None
