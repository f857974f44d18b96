"""JSON-LD metadata extraction shared by every source adapter.

Each adapter picks its own selection mode:
    type filter     → first node whose ``@type`` is in the accepted set
    first of array  → first element of the first top-level JSON-LD array

Fields the structured data lacks are resolved through page-level fallbacks
(description only) and finally through the sentinels in :mod:`biaslens.items`.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Iterator
from typing import Any

import dateparser
from bs4 import BeautifulSoup, Tag

from biaslens.items import Metadata

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_ISO_CLEANUP_RE = re.compile(r"\s+")

ARTICLE_TYPES: frozenset[str] = frozenset(
    {
        "article",
        "newsarticle",
        "reportage",
        "analysisnewsarticle",
        "opinionnewsarticle",
        "reviewnewsarticle",
        "backgroundnewsarticle",
        "liveblogposting",
        "blogposting",
    },
)


def _safe_str(val: Any, default: str = "") -> str:
    """Safely convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def _first(*values: Any) -> Any:
    """Return the first non-empty, non-None value."""
    for v in values:
        if v:
            return v
    return None


def _text_value(val: Any) -> str | None:
    """Unwrap a JSON-LD text field; lists yield their first string element."""
    if isinstance(val, list):
        val = next((v for v in val if isinstance(v, str) and v.strip()), None)
    if isinstance(val, (str, int, float)) and not isinstance(val, bool):
        return str(val) or None
    return None


def normalize_date(raw: Any) -> str | None:
    """Normalise a structured-data timestamp to ISO 8601.

    Values dateparser cannot read, or whose year falls outside 1990-2099,
    are returned verbatim so no information is lost.
    """
    if not raw or not isinstance(raw, str):
        return None
    raw = _ISO_CLEANUP_RE.sub(" ", raw.strip())
    try:
        parsed = dateparser.parse(
            raw,
            settings={
                "RETURN_AS_TIMEZONE_AWARE": True,
                "PREFER_DAY_OF_MONTH": "first",
                "PREFER_LOCALE_DATE_ORDER": False,
            },
        )
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", raw, exc)
        return raw
    if parsed and 1990 <= parsed.year <= 2099:
        return parsed.isoformat()
    return raw


# ---------------------------------------------------------------------------
# JSON-LD scanning
# ---------------------------------------------------------------------------

def iter_jsonld_payloads(soup: BeautifulSoup) -> Iterator[Any]:
    """Yield each decodable ``application/ld+json`` payload in document order.

    Malformed payloads are logged and skipped; the scan carries on.
    """
    for position, script in enumerate(soup.find_all("script", type="application/ld+json")):
        try:
            yield json.loads(script.string or "")
        except (json.JSONDecodeError, TypeError) as exc:
            logger.debug("Skipping malformed JSON-LD block #%d: %s", position, exc)


def _nodes_of(payload: Any) -> list[dict]:
    if isinstance(payload, list):
        return [n for n in payload if isinstance(n, dict)]
    if isinstance(payload, dict):
        graph = payload.get("@graph")
        if isinstance(graph, list):
            return [n for n in graph if isinstance(n, dict)]
        return [payload]
    return []


def _types_of(node: dict) -> set[str]:
    dtype = node.get("@type", "")
    if isinstance(dtype, list):
        return {str(t).lower() for t in dtype}
    return {str(dtype).lower()}


def find_jsonld_node(
    soup: BeautifulSoup,
    *,
    types: Iterable[str] = ARTICLE_TYPES,
    first_only: bool = False,
) -> dict | None:
    """Return the first JSON-LD node describing the article, or None.

    Args:
        soup:       Parsed page.
        types:      Accepted ``@type`` values (case-insensitive).  Ignored
                    when *first_only* is set.
        first_only: Take the first element of the first JSON-LD array with
                    no type filter.
    """
    wanted = {t.lower() for t in types}
    for payload in iter_jsonld_payloads(soup):
        if first_only:
            if isinstance(payload, list) and payload and isinstance(payload[0], dict):
                return payload[0]
            continue
        for node in _nodes_of(payload):
            if _types_of(node) & wanted:
                return node
    return None


def author_from_jsonld(node: dict) -> str | None:
    author = node.get("author")
    if isinstance(author, list):
        author = author[0] if author else None
    if isinstance(author, dict):
        name = author.get("name")
        return _text_value(name)
    if isinstance(author, str):
        return author
    return None


# ---------------------------------------------------------------------------
# Page-level fallbacks
# ---------------------------------------------------------------------------

def meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    """Return the stripped ``content`` of the first matching ``<meta>`` tag."""
    tag = soup.find("meta", attrs=attrs)
    if tag and isinstance(tag, Tag):
        return _safe_str(tag.get("content"), "").strip() or None
    return None


def _page_description(soup: BeautifulSoup) -> str | None:
    return _first(
        meta_content(soup, name="description"),
        meta_content(soup, property="og:description"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def metadata_from_node(node: dict, soup: BeautifulSoup) -> Metadata:
    """Map one JSON-LD article node onto :class:`Metadata`."""
    headline = _first(_text_value(node.get("headline")), _text_value(node.get("name")))
    description = _text_value(node.get("description"))
    return Metadata(
        title=headline,
        author=author_from_jsonld(node),
        description=description or _page_description(soup),
        date_published=normalize_date(node.get("datePublished")),
        date_modified=normalize_date(node.get("dateModified")),
    )


def extract_jsonld_metadata(
    soup: BeautifulSoup,
    *,
    types: Iterable[str] = ARTICLE_TYPES,
    first_only: bool = False,
) -> Metadata | None:
    """Extract article metadata from the page's structured data.

    Returns None when no JSON-LD node qualifies; callers substitute
    :meth:`Metadata.not_found`.
    """
    node = find_jsonld_node(soup, types=types, first_only=first_only)
    if node is None:
        logger.debug("No qualifying JSON-LD node found")
        return None
    return metadata_from_node(node, soup)
