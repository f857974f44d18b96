"""Built-in source adapters."""

from .base import ContentExtractor, MetadataExtractor, SourceAdapter
from .bbc import ADAPTER as BBC
from .cbs import ADAPTER as CBS
from .generic import ADAPTER as GENERIC
from .guardian import ADAPTER as GUARDIAN

BUILTIN_SOURCES: tuple[SourceAdapter, ...] = (CBS, GUARDIAN, BBC, GENERIC)

__all__ = [
    "BBC",
    "BUILTIN_SOURCES",
    "CBS",
    "GENERIC",
    "GUARDIAN",
    "ContentExtractor",
    "MetadataExtractor",
    "SourceAdapter",
]
