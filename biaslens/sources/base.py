"""Adapter contracts shared by every source.

Both extractor kinds follow ``runtime_checkable`` ``Protocol`` contracts, so
any plain function with the right signature can be registered without
inheriting from a base class.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup

from biaslens.items import ContentBlock, Metadata


@runtime_checkable
class MetadataExtractor(Protocol):
    """Return the page's metadata, or None when nothing usable is embedded."""

    def __call__(self, soup: BeautifulSoup) -> Metadata | None:
        ...


@runtime_checkable
class ContentExtractor(Protocol):
    """Return the page's content blocks in document order (empty when not found)."""

    def __call__(self, soup: BeautifulSoup) -> list[ContentBlock]:
        ...


@dataclass(frozen=True)
class SourceAdapter:
    """The pair of extractors specialised for one publisher."""

    name: str
    metadata_extractor: MetadataExtractor
    content_extractor: ContentExtractor
    url_pattern: re.Pattern[str] | None = None

    def matches(self, url: str) -> bool:
        return bool(self.url_pattern and self.url_pattern.search(url))
