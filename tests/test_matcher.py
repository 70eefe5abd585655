"""Tests for exact and partial scoring."""

from __future__ import annotations

from docscout.index.matcher import score_document, score_documents
from docscout.models import IndexedDocument


def doc(title: str, content: str, path: str | None = None) -> IndexedDocument:
    return IndexedDocument(path=path or f"{title.lower()}.md", title=title, content=content)


class TestScoreDocument:
    """Test score_document scoring rules."""

    def test_exact_title(self) -> None:
        """Exact title (+20) plus the word in the title (+5)."""
        assert score_document("routing", doc("Routing", "nothing here")) == 25

    def test_title_contains(self) -> None:
        """Title substring (+15) plus the word in the title (+5)."""
        assert score_document("routing", doc("Expo Routing", "nothing here")) == 20

    def test_title_words(self) -> None:
        """Each query word found in the title adds 5."""
        assert score_document("camera routing", doc("Routing with the camera", "nothing")) == 10

    def test_body_phrase_capped(self) -> None:
        """Phrase occurrences are worth 3 each up to 15, words 1 each up to 3."""
        assert score_document("routing", doc("Navigation", "routing " * 6)) == 18

    def test_body_words(self) -> None:
        assert score_document("expo router", doc("Intro", "Expo uses a router. Expo is nice.")) == 3

    def test_padded_query(self) -> None:
        """Surrounding whitespace does not cost the title bonuses."""
        document = doc("Routing", "nothing here")
        assert score_document("  routing ", document) == score_document("routing", document) == 25

    def test_blank_query(self) -> None:
        assert score_document("", doc("Routing", "routing")) == 0
        assert score_document("   ", doc("Routing", "routing")) == 0

    def test_code_block_phrase(self) -> None:
        """A block holding the full query adds 4."""
        content = "```\nnpx expo install\n```"
        # phrase in body 3, words 1 + 1, block phrase 4
        assert score_document("expo install", doc("Setup", content)) == 9

    def test_code_block_words(self) -> None:
        """A block without the phrase adds 2 per word found."""
        content = "```\ninstall expo\n```"
        # words in body 1 + 1, block words 2 + 2
        assert score_document("expo install", doc("Setup", content)) == 6

    def test_case_insensitive(self) -> None:
        assert score_document("ROUTING", doc("routing", "")) == 25

    def test_regex_characters_are_literal(self) -> None:
        assert score_document("a.b", doc("Title", "axb")) == 0

    def test_no_match(self) -> None:
        assert score_document("camera", doc("Routing", "file-based routing")) == 0


class TestScoreDocuments:
    """Test score_documents filtering and ordering."""

    def test_keeps_positive_scores_in_order(self) -> None:
        docs = [
            doc("Camera", "photos"),
            doc("Routing", "routes"),
            doc("Links", "routing between pages"),
        ]

        results = score_documents("routing", docs)

        assert [r.title for r in results] == ["Routing", "Links"]
        assert all(r.score > 0 for r in results)

    def test_title_match_beats_content_match(self) -> None:
        """Same query in the title outranks it in the body only."""
        in_title = doc("Routing", "Some text.", path="a.md")
        in_body = doc("Something", "routing", path="b.md")

        by_path = {r.path: r.score for r in score_documents("routing", [in_title, in_body])}

        assert by_path["a.md"] > by_path["b.md"]

    def test_excerpt_attached(self) -> None:
        results = score_documents("routing", [doc("Guide", "Expo Router uses file-based routing.")])

        assert "**routing**" in results[0].excerpt
