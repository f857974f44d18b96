"""BBC News adapter.

BBC article pages carry one ``NewsArticle`` JSON-LD block and mark every
body component with a ``data-component`` attribute (``headline-block``,
``text-block``, ``subheadline-block``, …).  Roles are keyed on that attribute
first and on the tag name inside text blocks.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from biaslens.extractors.content import extract_blocks
from biaslens.extractors.metadata import extract_jsonld_metadata
from biaslens.items import BlockKind, ContentBlock, Metadata
from biaslens.sources.base import SourceAdapter

URL_PATTERN = re.compile(r"bbc\.(co\.uk|com)/news/", re.IGNORECASE)

JSONLD_TYPES = ("NewsArticle", "ReportageNewsArticle")

CONTAINER_SELECTORS: tuple[str, ...] = (
    "main#main-content article",
    "main article",
    "article",
)

ROLES: dict[str, BlockKind] = {
    "headline-block":    BlockKind.HEADING,
    "subheadline-block": BlockKind.SUBHEADING,
    "p":                 BlockKind.PARAGRAPH,
    "blockquote":        BlockKind.QUOTE,
    "ul":                BlockKind.LIST,
    "ol":                BlockKind.LIST,
}

# Components that hold no article prose
SKIP_COMPONENTS = frozenset({
    "byline-block",
    "image-block",
    "video-block",
    "media-block",
    "links-block",
    "tag-list",
    "topic-list",
    "ad-slot",
    "caption-block",
})


def _role(tag: Tag) -> str:
    component = tag.get("data-component")
    return str(component) if component else tag.name


def parse_metadata(soup: BeautifulSoup) -> Metadata | None:
    return extract_jsonld_metadata(soup, types=JSONLD_TYPES)


def parse_content(soup: BeautifulSoup) -> list[ContentBlock]:
    return extract_blocks(soup, CONTAINER_SELECTORS, ROLES, _role, SKIP_COMPONENTS)


ADAPTER = SourceAdapter(
    name="bbc",
    metadata_extractor=parse_metadata,
    content_extractor=parse_content,
    url_pattern=URL_PATTERN,
)
