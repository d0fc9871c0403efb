"""Content domain models: pure Pydantic v2 data types.

``RawContentRecord`` is what a content source hands over: loosely typed,
with frontmatter that may still be serialized text.  ``ContentRecord`` is
the uniform, immutable shape the catalog works with.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawContentRecord(BaseModel):
    """A content record as returned by a content source."""

    slug: str | None = None
    title: str | None = None
    published: bool | None = None
    timestamp: Any = None
    frontmatter: dict[str, Any] | str | None = None
    body_ref: str = ""
    # used only when neither the record nor its frontmatter names a slug
    default_slug: str | None = None


class ContentRecord(BaseModel):
    """Normalized content record.

    Built once per catalog resolution and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    timestamp: date | None = None
    tags: tuple[str, ...] = Field(default_factory=tuple)
    published: bool = False
    description: str | None = None
    body_ref: str = ""


class SitemapEntry(BaseModel):
    """One route for the external sitemap generator."""

    model_config = ConfigDict(frozen=True)

    route: str
    priority: float = Field(ge=0.0, le=1.0)
