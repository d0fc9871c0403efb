"""Content domain: normalized records, sources, and the catalog.

Sources hand over raw records, the frontmatter normalizer turns them into
uniform ``ContentRecord`` objects, and ``ContentCatalog`` builds the
listing, tag facet, and sitemap views on top.
"""

from folio.content.catalog import CatalogSnapshot, ContentCatalog
from folio.content.models import ContentRecord, RawContentRecord, SitemapEntry
from folio.content.sources import (
    ContentSource,
    FileContentSource,
    SqlContentSource,
    create_source,
)

__all__ = [
    "CatalogSnapshot",
    "ContentCatalog",
    "ContentRecord",
    "ContentSource",
    "FileContentSource",
    "RawContentRecord",
    "SitemapEntry",
    "SqlContentSource",
    "create_source",
]
