"""YAML-declared source adapters.

Lets a deployment add publishers without writing Python::

    sources:
      apnews:
        url_pattern: "apnews\\.com/article/"
        jsonld_types: [NewsArticle]
        container: ["div.RichTextStoryBody", "main"]
        roles: {p: paragraph, h2: subheading, blockquote: quote}
        skip_roles: [figure]
"""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from biaslens.extractors.content import extract_blocks
from biaslens.extractors.metadata import ARTICLE_TYPES, extract_jsonld_metadata
from biaslens.items import BlockKind
from biaslens.registry import register_source
from biaslens.sources.base import SourceAdapter

logger = logging.getLogger(__name__)

_DEFAULT_ROLES: dict[str, str] = {
    "h2": "subheading",
    "h3": "subheading",
    "p": "paragraph",
    "blockquote": "quote",
    "ul": "list",
    "ol": "list",
}


def _str_list(cfg: dict[str, Any], key: str) -> list[str]:
    value = cfg.get(key) or []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise ValueError(f"{key!r} must be a string or a list of strings")
    return value


def _adapter_from_profile(name: str, cfg: dict[str, Any]) -> SourceAdapter:
    container = _str_list(cfg, "container")
    if not container:
        raise ValueError("'container' must be a selector or a list of selectors")

    raw_roles = cfg.get("roles") or _DEFAULT_ROLES
    if not isinstance(raw_roles, dict):
        raise ValueError("'roles' must be a mapping of role to block kind")
    roles = {str(k): BlockKind(str(v)) for k, v in raw_roles.items()}
    skip_roles = frozenset(_str_list(cfg, "skip_roles"))

    pattern = cfg.get("url_pattern")
    url_pattern = re.compile(str(pattern), re.IGNORECASE) if pattern else None

    metadata_extractor = functools.partial(
        extract_jsonld_metadata,
        types=tuple(_str_list(cfg, "jsonld_types")) or ARTICLE_TYPES,
        first_only=bool(cfg.get("first_only", False)),
    )
    content_extractor = functools.partial(
        extract_blocks,
        selectors=tuple(container),
        roles=roles,
        skip_roles=skip_roles,
    )
    return SourceAdapter(
        name=name.lower(),
        metadata_extractor=metadata_extractor,
        content_extractor=content_extractor,
        url_pattern=url_pattern,
    )


def load_profiles(path: str | Path) -> list[SourceAdapter]:
    """Load the YAML file at *path* and build one adapter per valid entry."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    sources = data.get("sources", {}) if isinstance(data, dict) else {}

    adapters: list[SourceAdapter] = []
    if not isinstance(sources, dict):
        logger.warning("Profile %s: 'sources' must be a mapping", path)
        return adapters
    for name, cfg in sources.items():
        if not isinstance(name, str) or not isinstance(cfg, dict):
            logger.warning("Profile %s: skipping malformed entry %r", path, name)
            continue
        try:
            adapters.append(_adapter_from_profile(name, cfg))
        except (ValueError, re.error) as exc:
            logger.warning("Profile %s: skipping source %r: %s", path, name, exc)
    return adapters


def register_profiles(path: str | Path) -> list[str]:
    """Register every adapter declared in *path*; return their names."""
    adapters = load_profiles(path)
    for adapter in adapters:
        register_source(adapter)
    logger.info("Registered %d source profile(s) from %s", len(adapters), path)
    return [a.name for a in adapters]
