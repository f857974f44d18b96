"""Classify an article-body container into typed content blocks.

Adapters supply two pieces of data:

* an ordered tuple of CSS selectors for the body container (first match wins)
* a role lookup mapping an element role (usually the tag name, sometimes a
  ``data-component`` value) to a :class:`~biaslens.items.BlockKind`
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Iterable, Mapping

from bs4 import BeautifulSoup, Tag

from biaslens.items import BlockKind, ContentBlock

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# Wrappers worth descending into when they carry no role of their own
_WRAPPER_TAGS = frozenset({"div", "section", "article", "main", "figure"})

# Never part of the article text
_SKIP_TAGS = frozenset({"script", "style", "noscript", "template", "iframe", "button", "svg", "form"})

RoleFunc = Callable[[Tag], str | None]


def tag_role(tag: Tag) -> str | None:
    """Default role: the element's tag name."""
    return tag.name


def clean_text(tag: Tag) -> str:
    return _WHITESPACE_RE.sub(" ", tag.get_text(separator=" ")).strip()


def locate_container(soup: BeautifulSoup | Tag, selectors: Iterable[str]) -> Tag | None:
    """Return the first element matched by *selectors*, tried in order."""
    for selector in selectors:
        try:
            found = soup.select_one(selector)
        except Exception as exc:
            logger.debug("CSS selector %r failed: %s", selector, exc)
            continue
        if isinstance(found, Tag):
            logger.debug("Content container matched %r", selector)
            return found
    return None


def _list_text(tag: Tag) -> str:
    items = [clean_text(li) for li in tag.find_all("li")]
    return "\n".join(i for i in items if i)


def classify_children(
    container: Tag,
    roles: Mapping[str, BlockKind],
    role_of: RoleFunc = tag_role,
    skip_roles: Collection[str] = (),
) -> list[ContentBlock]:
    """Walk *container* in document order and emit one block per recognised element.

    Elements whose role is not in *roles* are skipped without consuming an
    index; plain wrappers are descended into unless their role is in
    *skip_roles*.  A recognised element is emitted as a unit and its
    descendants are not visited.
    """
    blocks: list[ContentBlock] = []

    def _walk(node: Tag) -> None:
        for child in node.children:
            if not isinstance(child, Tag) or child.name in _SKIP_TAGS:
                continue
            role = role_of(child) or ""
            kind = roles.get(role)
            if kind is None:
                if role not in skip_roles and child.name in _WRAPPER_TAGS:
                    _walk(child)
                continue
            text = _list_text(child) if kind == BlockKind.LIST else clean_text(child)
            if text:
                blocks.append(ContentBlock(index=len(blocks), kind=kind, text=text))

    _walk(container)
    return blocks


def extract_blocks(
    soup: BeautifulSoup,
    selectors: Iterable[str],
    roles: Mapping[str, BlockKind],
    role_of: RoleFunc = tag_role,
    skip_roles: Collection[str] = (),
) -> list[ContentBlock]:
    """Locate the body container and classify it; empty when no container matches."""
    container = locate_container(soup, selectors)
    if container is None:
        logger.debug("No content container found")
        return []
    return classify_children(container, roles, role_of, skip_roles)
