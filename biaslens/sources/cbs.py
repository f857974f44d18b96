"""CBS News adapter.

CBS pages embed several JSON-LD blocks (``BreadcrumbList``, ``Organization``,
``VideoObject`` …) ahead of the article; the ``NewsArticle`` one is selected
by its type tag.  The body sits in ``section.content__body`` as a flat run of
paragraphs, subheadings and quotes interleaved with embeds and ad slots.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from biaslens.extractors.content import extract_blocks
from biaslens.extractors.metadata import extract_jsonld_metadata
from biaslens.items import BlockKind, ContentBlock, Metadata
from biaslens.sources.base import SourceAdapter

URL_PATTERN = re.compile(r"cbsnews\.com/(news|[a-z-]+/news)/", re.IGNORECASE)

JSONLD_TYPES = ("NewsArticle",)

CONTAINER_SELECTORS: tuple[str, ...] = (
    "section.content__body",
    ".content__body",
    "article.content",
)

ROLES: dict[str, BlockKind] = {
    "h2":         BlockKind.SUBHEADING,
    "h3":         BlockKind.SUBHEADING,
    "p":          BlockKind.PARAGRAPH,
    "blockquote": BlockKind.QUOTE,
    "pullquote":  BlockKind.QUOTE,
    "ul":         BlockKind.LIST,
    "ol":         BlockKind.LIST,
}

SKIP_ROLES = frozenset({"embed", "ad"})


def _role(tag: Tag) -> str:
    classes = " ".join(tag.get("class") or [])
    if "pullquote" in classes:
        return "pullquote"
    if tag.name == "figure" or "embed" in classes:
        return "embed"
    if "ad-wrapper" in classes or "content__ad" in classes:
        return "ad"
    return tag.name


def parse_metadata(soup: BeautifulSoup) -> Metadata | None:
    return extract_jsonld_metadata(soup, types=JSONLD_TYPES)


def parse_content(soup: BeautifulSoup) -> list[ContentBlock]:
    return extract_blocks(soup, CONTAINER_SELECTORS, ROLES, _role, SKIP_ROLES)


ADAPTER = SourceAdapter(
    name="cbs",
    metadata_extractor=parse_metadata,
    content_extractor=parse_content,
    url_pattern=URL_PATTERN,
)
