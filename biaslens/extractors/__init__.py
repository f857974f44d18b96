"""Extraction sub-package: JSON-LD metadata, typed content blocks, fallback scraping."""

from .content import classify_children, extract_blocks, locate_container
from .fallback import extract_fallback_blocks
from .metadata import extract_jsonld_metadata, find_jsonld_node

__all__ = [
    "classify_children",
    "extract_blocks",
    "extract_fallback_blocks",
    "extract_jsonld_metadata",
    "find_jsonld_node",
    "locate_container",
]
