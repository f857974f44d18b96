"""Tests for content-block classification and the fallback extractor."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from biaslens.extractors.content import classify_children, extract_blocks, locate_container
from biaslens.extractors.fallback import extract_fallback_blocks
from biaslens.items import BlockKind
from biaslens.sources import bbc, cbs, guardian


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _assert_contiguous(blocks) -> None:
    assert [b.index for b in blocks] == list(range(len(blocks)))


ROLES = {"p": BlockKind.PARAGRAPH, "h2": BlockKind.SUBHEADING, "blockquote": BlockKind.QUOTE}


# ---------------------------------------------------------------------------
# Shared machinery
# ---------------------------------------------------------------------------

class TestLocateContainer:
    def test_priority_order_not_document_order(self):
        soup = _soup('<div class="b">B</div><div class="a">A</div>')
        assert locate_container(soup, (".a", ".b")).get_text() == "A"

    def test_falls_through_to_later_selector(self):
        soup = _soup('<div class="b">B</div>')
        assert locate_container(soup, (".missing", ".b")).get_text() == "B"

    def test_none_when_nothing_matches(self):
        assert locate_container(_soup("<p>x</p>"), (".a", "#b")) is None

    def test_invalid_selector_is_skipped(self):
        soup = _soup('<div class="b">B</div>')
        assert locate_container(soup, ("[[[", ".b")).get_text() == "B"


class TestClassifyChildren:
    def test_unrecognised_elements_do_not_consume_index(self):
        soup = _soup(
            "<section><p>one</p><table><tr><td>t</td></tr></table>"
            "<h2>two</h2><img src='x'><blockquote>three</blockquote></section>",
        )
        blocks = classify_children(soup.section, ROLES)
        assert [(b.index, b.kind, b.text) for b in blocks] == [
            (0, BlockKind.PARAGRAPH, "one"),
            (1, BlockKind.SUBHEADING, "two"),
            (2, BlockKind.QUOTE, "three"),
        ]

    def test_wrappers_are_descended_in_document_order(self):
        soup = _soup("<section><div><p>a</p><div><p>b</p></div></div><p>c</p></section>")
        assert [b.text for b in classify_children(soup.section, ROLES)] == ["a", "b", "c"]

    def test_recognised_element_emitted_once(self):
        soup = _soup("<section><blockquote><p>inner</p></blockquote></section>")
        blocks = classify_children(soup.section, ROLES)
        assert len(blocks) == 1
        assert blocks[0].kind == BlockKind.QUOTE

    def test_empty_text_skipped(self):
        soup = _soup("<section><p>  </p><p>kept</p></section>")
        blocks = classify_children(soup.section, ROLES)
        assert [(b.index, b.text) for b in blocks] == [(0, "kept")]

    def test_script_and_style_ignored(self):
        soup = _soup("<section><script>var x;</script><style>p{}</style><p>ok</p></section>")
        assert [b.text for b in classify_children(soup.section, ROLES)] == ["ok"]

    def test_skip_roles_not_descended(self):
        soup = _soup("<section><div class='ad'><p>buy</p></div><p>story</p></section>")
        blocks = classify_children(
            soup.section,
            ROLES,
            role_of=lambda t: "ad" if "ad" in (t.get("class") or []) else t.name,
            skip_roles={"ad"},
        )
        assert [b.text for b in blocks] == ["story"]

    def test_list_items_joined(self):
        soup = _soup("<section><ul><li>one</li><li> </li><li>two</li></ul></section>")
        blocks = classify_children(soup.section, {"ul": BlockKind.LIST})
        assert blocks[0].text == "one\ntwo"

    def test_missing_container_returns_empty(self):
        assert extract_blocks(_soup("<p>x</p>"), (".body",), ROLES) == []

    def test_document_not_modified(self, bbc_html):
        soup = _soup(bbc_html)
        before = str(soup)
        bbc.parse_content(soup)
        extract_fallback_blocks(soup)
        assert str(soup) == before


# ---------------------------------------------------------------------------
# Source adapters
# ---------------------------------------------------------------------------

class TestSourceContent:
    def test_bbc_blocks(self, bbc_html):
        blocks = bbc.parse_content(_soup(bbc_html))
        assert [(b.kind, b.text) for b in blocks] == [
            (BlockKind.HEADING, "Council approves new housing plan"),
            (BlockKind.PARAGRAPH, "A controversial plan to build 2,000 homes has been approved."),
            (BlockKind.PARAGRAPH, "Critics say the council ignored residents."),
            (BlockKind.PARAGRAPH, "Supporters called it a long overdue step."),
            (BlockKind.SUBHEADING, "What happens next?"),
            (BlockKind.PARAGRAPH, "Work is expected to begin next spring."),
        ]
        _assert_contiguous(blocks)

    def test_bbc_skips_byline_and_links(self, bbc_html):
        texts = [b.text for b in bbc.parse_content(_soup(bbc_html))]
        assert "Jane Reporter" not in texts
        assert "Related story" not in texts
        assert "The site of the new homes" not in texts

    def test_cbs_blocks(self, cbs_html):
        blocks = cbs.parse_content(_soup(cbs_html))
        assert [(b.kind, b.text) for b in blocks] == [
            (BlockKind.PARAGRAPH, "The Senate voted late Friday to pass the bill."),
            (BlockKind.SUBHEADING, "Reaction"),
            (BlockKind.PARAGRAPH, "Lawmakers from both parties praised the compromise."),
            (BlockKind.QUOTE, '"This is a good day for the country," one senator said.'),
            (BlockKind.LIST, "Funds the government through March\nAdds disaster relief"),
        ]
        _assert_contiguous(blocks)

    def test_guardian_blocks(self, guardian_html):
        blocks = guardian.parse_content(_soup(guardian_html))
        assert [(b.kind, b.text) for b in blocks] == [
            (BlockKind.PARAGRAPH, "Alpine glaciers lost a record amount of ice this year."),
            (BlockKind.PARAGRAPH, "The findings were published on Monday."),
            (BlockKind.SUBHEADING, "A warming trend"),
            (BlockKind.QUOTE, "We are watching them disappear"),
            (BlockKind.PARAGRAPH, "Researchers urged governments to act."),
        ]
        _assert_contiguous(blocks)

    @pytest.mark.parametrize("adapter", [cbs, guardian])
    def test_missing_container_is_empty(self, adapter, no_article_html):
        assert adapter.parse_content(_soup(no_article_html)) == []


# ---------------------------------------------------------------------------
# Fallback extractor
# ---------------------------------------------------------------------------

class TestFallback:
    def test_collects_trimmed_paragraphs(self, no_jsonld_html):
        blocks = extract_fallback_blocks(_soup(no_jsonld_html))
        assert [b.text for b in blocks] == [
            "First paragraph of the story.",
            "Second paragraph, nested.",
            "Third paragraph.",
        ]
        assert all(b.kind == BlockKind.PARAGRAPH for b in blocks)
        _assert_contiguous(blocks)

    def test_no_container_returns_empty(self, no_article_html):
        assert extract_fallback_blocks(_soup(no_article_html)) == []

    def test_main_article_preferred_over_bare_article(self):
        soup = _soup(
            "<article><p>teaser</p></article>"
            "<main><article><p>story</p></article></main>",
        )
        assert [b.text for b in extract_fallback_blocks(soup)] == ["story"]

    def test_text_block_component(self):
        soup = _soup('<div data-component="text-block"><p>one</p><p>two</p></div>')
        assert [b.index for b in extract_fallback_blocks(soup)] == [0, 1]
