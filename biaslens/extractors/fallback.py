"""Source-agnostic paragraph scraping.

Used when a source adapter yields no blocks, and for sources with no
adapter at all.  Only ``<p>`` elements are collected, so every emitted
block is a paragraph.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from biaslens.extractors.content import clean_text, locate_container
from biaslens.items import BlockKind, ContentBlock

logger = logging.getLogger(__name__)

# Generic article containers (tried in order)
FALLBACK_SELECTORS: tuple[str, ...] = (
    "main article",
    'main [data-component="article-body"]',
    "article",
    '[data-component="text-block"]',
    '[itemprop="articleBody"]',
    "main",
)


def extract_fallback_blocks(
    soup: BeautifulSoup,
    selectors: tuple[str, ...] = FALLBACK_SELECTORS,
) -> list[ContentBlock]:
    """Collect every non-empty paragraph inside the first generic container.

    Returns an empty list when no container matches; the caller reports
    that as "no article text found".
    """
    container = locate_container(soup, selectors)
    if container is None:
        logger.debug("Fallback found no article container")
        return []

    blocks: list[ContentBlock] = []
    for p in container.find_all("p"):
        text = clean_text(p)
        if text:
            blocks.append(ContentBlock(index=len(blocks), kind=BlockKind.PARAGRAPH, text=text))
    logger.debug("Fallback collected %d paragraphs", len(blocks))
    return blocks
