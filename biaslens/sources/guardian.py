"""The Guardian adapter.

The Guardian stores its metadata as the first element of a JSON-LD array
(``[NewsArticle, WebPage]``), so no type filter is applied.  Body elements
rendered by DCR carry a ``data-spacefinder-type`` naming the page element;
pull quotes are recognised through it, rich links and media are skipped.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from biaslens.extractors.content import extract_blocks
from biaslens.extractors.metadata import extract_jsonld_metadata
from biaslens.items import BlockKind, ContentBlock, Metadata
from biaslens.sources.base import SourceAdapter

URL_PATTERN = re.compile(r"theguardian\.com/[a-z-]+(/[a-z-]+)*/\d{4}/", re.IGNORECASE)

CONTAINER_SELECTORS: tuple[str, ...] = (
    ".article-body-commercial-selector",
    '[data-gu-name="body"]',
    "#maincontent",
)

ROLES: dict[str, BlockKind] = {
    "h2":         BlockKind.SUBHEADING,
    "h3":         BlockKind.SUBHEADING,
    "p":          BlockKind.PARAGRAPH,
    "pullquote":  BlockKind.QUOTE,
    "blockquote": BlockKind.QUOTE,
    "ul":         BlockKind.LIST,
    "ol":         BlockKind.LIST,
}

SKIP_ROLES = frozenset({"rich-link", "media"})

_ELEMENT_SUFFIX_RE = re.compile(r"\.(\w+)BlockElement$")


def _role(tag: Tag) -> str:
    element = str(tag.get("data-spacefinder-type") or "")
    m = _ELEMENT_SUFFIX_RE.search(element)
    if m:
        kind = m.group(1)
        if kind == "Pullquote":
            return "pullquote"
        if kind == "RichLink":
            return "rich-link"
        return "media"
    return tag.name


def parse_metadata(soup: BeautifulSoup) -> Metadata | None:
    return extract_jsonld_metadata(soup, first_only=True)


def parse_content(soup: BeautifulSoup) -> list[ContentBlock]:
    return extract_blocks(soup, CONTAINER_SELECTORS, ROLES, _role, SKIP_ROLES)


ADAPTER = SourceAdapter(
    name="guardian",
    metadata_extractor=parse_metadata,
    content_extractor=parse_content,
    url_pattern=URL_PATTERN,
)
