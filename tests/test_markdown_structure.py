"""Tests for markdown structure parsing."""

from __future__ import annotations

from docmap.analysis.markdown_structure import MarkdownStructureParser, parse_markdown
from docmap.core.document import Section
from docmap.utils.tokens import estimate_tokens


def _assert_rollup(section: Section) -> None:
    """Check cumulative tokens and level ordering for a whole subtree."""
    assert section.tokens == section.own_tokens + sum(c.tokens for c in section.children)
    for child in section.children:
        assert child.level > section.level
        assert child.parent is section
        _assert_rollup(child)


# ===================================================================
# Headings
# ===================================================================


class TestHeadings:
    """Tests for ATX heading recognition."""

    def test_scenario_document(self, scenario_markdown):
        doc = parse_markdown(scenario_markdown)

        assert len(doc.sections) == 1
        root = doc.sections[0]
        assert root.title == "Title"
        assert root.level == 1
        assert [c.title for c in root.children] == ["Section One", "Section Two"]
        assert all(c.level == 2 for c in root.children)

        section_one = root.children[0]
        assert "bold term" in section_one.key_terms
        assert "code" in section_one.key_terms

    def test_all_six_levels(self):
        text = "\n".join(f"{'#' * n} Level {n}" for n in range(1, 7))
        doc = parse_markdown(text)
        levels = [s.level for s in doc.get_all_sections()]
        assert levels == [1, 2, 3, 4, 5, 6]

    def test_seven_hashes_is_not_a_heading(self):
        doc = parse_markdown("####### Too deep")
        assert doc.sections == []

    def test_hash_without_space_is_not_a_heading(self):
        doc = parse_markdown("#hashtag\n# Real")
        assert [s.title for s in doc.sections] == ["Real"]

    def test_title_trimmed(self):
        doc = parse_markdown("##   Spaced out   ")
        assert doc.sections[0].title == "Spaced out"

    def test_tab_after_hashes(self):
        doc = parse_markdown("#\tTabbed")
        assert doc.sections[0].title == "Tabbed"

    def test_unicode_space_after_hashes_is_not_a_heading(self):
        assert parse_markdown("#\u3000Title\n").sections == []
        assert parse_markdown("#\u00a0Title\n").sections == []

    def test_skipped_level_nests_under_nearest_lower(self):
        doc = parse_markdown("# A\n### B\n")
        assert len(doc.sections) == 1
        a = doc.sections[0]
        assert [c.title for c in a.children] == ["B"]
        assert a.children[0].level == 3
        assert a.children[0].depth == 1

    def test_multiple_roots(self):
        doc = parse_markdown("# One\ntext\n# Two\ntext\n")
        assert [s.title for s in doc.sections] == ["One", "Two"]

    def test_document_starting_below_level_one(self):
        doc = parse_markdown("## A\n## B\n### C\n")
        assert [s.title for s in doc.sections] == ["A", "B"]
        assert doc.sections[1].children[0].title == "C"


# ===================================================================
# Content, tokens and line ranges
# ===================================================================


class TestContent:
    """Tests for section content and token accounting."""

    def test_content_excludes_heading_and_is_trimmed(self):
        doc = parse_markdown("# A\n\n  body line  \n\n")
        assert doc.sections[0].content == "body line"

    def test_preamble_discarded(self):
        doc = parse_markdown("Preamble text here\n# A\nbody\n")
        assert len(doc.sections) == 1
        assert "Preamble" not in doc.sections[0].content

    def test_own_tokens_from_own_content(self):
        body = "x" * 40
        doc = parse_markdown(f"# A\n{body}\n## B\n{'y' * 80}\n")
        a = doc.sections[0]
        assert a.own_tokens == estimate_tokens(body)
        assert a.children[0].own_tokens == 20
        assert a.tokens == 10 + 20

    def test_total_tokens_not_double_counted(self):
        doc = parse_markdown(f"# A\n{'x' * 40}\n## B\n{'y' * 80}\n### C\n{'z' * 40}\n")
        assert doc.total_tokens == 10 + 20 + 10
        assert doc.total_tokens == sum(root.tokens for root in doc.sections)

    def test_rollup_invariant(self, sample_markdown_content):
        doc = parse_markdown(sample_markdown_content)
        for root in doc.sections:
            _assert_rollup(root)
            assert root.tokens >= root.own_tokens

    def test_code_fence_lines_are_content(self):
        doc = parse_markdown("# A\n```\n# not a comment heading?\n```\n")
        # The narrow grammar has no fence awareness
        assert [s.title for s in doc.get_all_sections()] == ["A", "not a comment heading?"]

    def test_line_ranges(self):
        text = "# A\none\ntwo\n## B\nthree"
        doc = parse_markdown(text)
        a = doc.sections[0]
        b = a.children[0]
        assert (a.line_start, a.line_end) == (1, 3)
        assert (b.line_start, b.line_end) == (4, 5)

    def test_last_section_ends_at_line_count(self):
        doc = parse_markdown("# A\nbody\n")
        # Trailing newline produces an empty final line
        assert doc.sections[0].line_end == 3


# ===================================================================
# References
# ===================================================================


class TestReferences:
    """Tests for link-to-markdown references."""

    def test_scenario_reference(self, scenario_markdown):
        doc = parse_markdown(scenario_markdown)
        assert len(doc.references) == 1
        ref = doc.references[0]
        assert ref.text == "link"
        assert ref.target == "other.md"
        assert ref.line == 9

    def test_anchor_stripped(self):
        doc = parse_markdown("[Install](docs/setup.md#linux)")
        assert doc.references[0].target == "docs/setup.md"

    def test_non_markdown_links_ignored(self):
        text = "[site](https://example.com) [img](pic.png) [doc](notes.md)"
        doc = parse_markdown(text)
        assert [r.target for r in doc.references] == ["notes.md"]

    def test_multiple_links_in_order(self):
        text = "# A\n[one](1.md) and [two](2.md)\n[three](3.md#x)\n"
        doc = parse_markdown(text)
        assert [(r.text, r.target, r.line) for r in doc.references] == [
            ("one", "1.md", 2),
            ("two", "2.md", 2),
            ("three", "3.md", 3),
        ]

    def test_references_in_headings_and_preamble(self):
        text = "See [intro](intro.md)\n# Read [api](api.md)\n"
        doc = parse_markdown(text)
        assert [r.line for r in doc.references] == [1, 2]

    def test_no_headings_still_collects_references(self):
        doc = parse_markdown("Just text with [a link](other.md).")
        assert doc.sections == []
        assert doc.total_tokens == 0
        assert len(doc.references) == 1


# ===================================================================
# Edge cases
# ===================================================================


class TestEdgeCases:
    """Boundary inputs."""

    def test_empty_text(self):
        doc = parse_markdown("")
        assert doc.sections == []
        assert doc.references == []
        assert doc.total_tokens == 0

    def test_deterministic(self, sample_markdown_content):
        first = parse_markdown(sample_markdown_content)
        second = parse_markdown(sample_markdown_content)
        assert first.to_dict() == second.to_dict()

    def test_scan_returns_flat_unlinked_sections(self):
        sections, references = MarkdownStructureParser().scan("# A\n## B\n")
        assert [s.title for s in sections] == ["A", "B"]
        assert all(not s.children for s in sections)
        assert references == []
