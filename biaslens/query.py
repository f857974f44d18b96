"""biaslens.query - extraction and bias-analysis API.

Basic usage::

    from biaslens.query import parse

    article = parse(html, url="https://www.bbc.com/news/articles/c0abc123")
    print(article.metadata.title)
    for block in article.blocks:
        print(block.index, block.kind, block.text)

With bias analysis::

    import asyncio
    from biaslens.bias import BiasClient
    from biaslens.query import analyze

    annotated = asyncio.run(analyze(html, "bbc", client=BiasClient()))
    for block in annotated.flagged:
        print(block.label, block.reason)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from biaslens.bias import pair_annotations
from biaslens.registry import detect_source, extract

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from biaslens.bias import BiasClient
    from biaslens.items import AnnotatedArticle, Article

logger = logging.getLogger(__name__)


def parse(
    document: str | BeautifulSoup,
    source: str | None = None,
    *,
    url: str = "",
) -> Article:
    """Extract an article from *document* without any network access.

    Args:
        document: Raw HTML or a parsed ``BeautifulSoup`` tree.
        source:   Registered source identifier.  When omitted it is detected
                  from *url*; with neither, the generic adapter is used.
        url:      Page URL, only used for source detection.
    """
    if source is None and url:
        source = detect_source(url)
        logger.debug("Detected source %r for %s", source, url)
    return extract(document, source)


async def analyze(
    document: str | BeautifulSoup,
    source: str | None = None,
    *,
    url: str = "",
    client: BiasClient,
) -> AnnotatedArticle:
    """Extract an article and annotate its paragraphs with the bias service.

    Only paragraph blocks are sent, each with its original index, in a
    single request.

    Raises:
        :class:`~biaslens.bias.AnalysisUnavailable`: when the service cannot
            be reached or answers with an error.
    """
    article = parse(document, source, url=url)
    annotations = await client.classify(article.paragraphs)
    return pair_annotations(article, annotations)
