"""Pydantic schema for extracted articles and bias annotations."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------

TITLE_NOT_FOUND = "Title not found"
AUTHOR_NOT_FOUND = "Author not found"
DESCRIPTION_NOT_FOUND = "Description not found"
DATE_PUBLISHED_NOT_FOUND = "Date published not found"
DATE_MODIFIED_NOT_FOUND = "Date modified not found"

SENTINELS: dict[str, str] = {
    "title": TITLE_NOT_FOUND,
    "author": AUTHOR_NOT_FOUND,
    "description": DESCRIPTION_NOT_FOUND,
    "date_published": DATE_PUBLISHED_NOT_FOUND,
    "date_modified": DATE_MODIFIED_NOT_FOUND,
}

NO_CONTENT_MESSAGE = "No article text found"


class BlockKind(StrEnum):
    HEADING    = "heading"
    SUBHEADING = "subheading"
    PARAGRAPH  = "paragraph"
    QUOTE      = "quote"
    LIST       = "list"


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------

class Metadata(BaseModel):
    """Article-level metadata.  Missing values hold the matching sentinel."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = TITLE_NOT_FOUND
    author: str = AUTHOR_NOT_FOUND
    description: str = DESCRIPTION_NOT_FOUND
    date_published: str = Field(DATE_PUBLISHED_NOT_FOUND, alias="datePublished")
    date_modified: str = Field(DATE_MODIFIED_NOT_FOUND, alias="dateModified")

    @field_validator("*", mode="before")
    @classmethod
    def strip_or_sentinel(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return SENTINELS[info.field_name]
        if isinstance(v, str):
            v = v.strip()
            return v or SENTINELS[info.field_name]
        return v

    @classmethod
    def not_found(cls) -> Metadata:
        return cls()

    def is_found(self, field: str) -> bool:
        """Return False when *field* still holds its sentinel value."""
        return getattr(self, field) != SENTINELS[field]


class ContentBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    kind: BlockKind
    text: str


class Article(BaseModel):
    """Canonical output of one extraction pass."""

    model_config = ConfigDict(frozen=True)

    metadata: Metadata = Field(default_factory=Metadata)
    blocks: tuple[ContentBlock, ...] = ()
    source: str = "generic"
    extraction_method: str = "adapter"  # adapter | fallback

    @model_validator(mode="after")
    def check_indices(self) -> Article:
        for position, block in enumerate(self.blocks):
            if block.index != position:
                raise ValueError(
                    f"block indices must be contiguous from 0: "
                    f"got {block.index} at position {position}",
                )
        return self

    @property
    def paragraphs(self) -> list[ContentBlock]:
        """Paragraph blocks in document order, original indices kept."""
        return [b for b in self.blocks if b.kind == BlockKind.PARAGRAPH]

    @property
    def text(self) -> str:
        return "\n\n".join(b.text for b in self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks


# ---------------------------------------------------------------------------
# Bias annotations
# ---------------------------------------------------------------------------

class Annotation(BaseModel):
    """One flagged block as returned by the bias service."""

    model_config = ConfigDict(frozen=True)

    index: int
    text: str = ""
    label: str = ""
    reason: str = ""


class AnnotatedBlock(ContentBlock):
    label: str | None = None
    reason: str | None = None

    @property
    def is_flagged(self) -> bool:
        return self.label is not None


class AnnotatedArticle(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: Metadata
    blocks: tuple[AnnotatedBlock, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    source: str = "generic"

    @property
    def flagged(self) -> list[AnnotatedBlock]:
        return [b for b in self.blocks if b.is_flagged]
