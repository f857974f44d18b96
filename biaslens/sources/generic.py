"""Adapter for unregistered sources.

Metadata comes from any article-typed JSON-LD node; content is always left
to the fallback extractor.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from biaslens.extractors.metadata import extract_jsonld_metadata
from biaslens.items import ContentBlock, Metadata
from biaslens.sources.base import SourceAdapter


def parse_metadata(soup: BeautifulSoup) -> Metadata | None:
    return extract_jsonld_metadata(soup)


def parse_content(soup: BeautifulSoup) -> list[ContentBlock]:
    return []


ADAPTER = SourceAdapter(
    name="generic",
    metadata_extractor=parse_metadata,
    content_extractor=parse_content,
)
