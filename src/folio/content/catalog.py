"""Content catalog: listing, tag facets, and sitemap entries.

Every public call resolves the catalog afresh from its source: there is
no cache between resolutions, so a record whose ``published`` flag flips
appears or disappears on the very next call.  Source and frontmatter
failures propagate to the caller.
"""

from __future__ import annotations

import logging
import unicodedata

from folio.content.frontmatter import normalize
from folio.content.models import ContentRecord, SitemapEntry
from folio.content.sources import ContentSource
from folio.errors import NotFoundError
from folio.timing import ServerTiming

logger = logging.getLogger(__name__)

DEFAULT_ROUTE_PREFIX = "content"
DEFAULT_PRIORITY = 0.7
TIMING_LABEL = "contentList"

# Alias to avoid shadowing by the list methods below
_list = list


def sort_newest_first(records: _list[ContentRecord]) -> _list[ContentRecord]:
    """Sort by timestamp descending; undated records go last.

    Stable: records with equal timestamps keep their input order.
    """
    dated = [r for r in records if r.timestamp is not None]
    undated = [r for r in records if r.timestamp is None]
    dated.sort(key=lambda r: r.timestamp, reverse=True)  # type: ignore[arg-type,return-value]
    return dated + undated


def facet_sort_key(tag: str) -> tuple[str, str, str]:
    """Collation key for tag facets.

    Compares base letters first, ignoring accents and case, so "éclair"
    sorts before "forms".  Ties fall back to accents, then to case with
    lowercase first ("react" before "React").
    """
    decomposed = unicodedata.normalize("NFKD", tag)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), tag.casefold(), tag.swapcase())


class CatalogSnapshot:
    """One resolution of the catalog, already filtered and sorted."""

    def __init__(
        self,
        records: _list[ContentRecord],
        route_prefix: str = DEFAULT_ROUTE_PREFIX,
        priority: float = DEFAULT_PRIORITY,
    ) -> None:
        self._records = tuple(records)
        self._route_prefix = route_prefix.strip("/")
        self._priority = priority

    @property
    def records(self) -> tuple[ContentRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def list(self, tag: str | None = None) -> _list[ContentRecord]:
        """Return records, restricted to those carrying *tag* when given.

        Matching is exact and case-sensitive against the trimmed tags.
        """
        if not tag:
            return _list(self._records)
        return [r for r in self._records if tag in r.tags]

    def tag_facets(self) -> _list[str]:
        """Distinct tags over the whole snapshot, ascending by ``facet_sort_key``."""
        tags: set[str] = set()
        for record in self._records:
            tags.update(record.tags)
        return sorted(tags, key=facet_sort_key)

    def sitemap_entries(self) -> _list[SitemapEntry]:
        """Static listing route first, then one route per published record."""
        entries = [SitemapEntry(route=self._route_prefix, priority=self._priority)]
        entries.extend(
            SitemapEntry(route=f"{self._route_prefix}/{r.slug}", priority=self._priority)
            for r in self._records
            if r.published
        )
        return entries

    def get(self, slug: str) -> ContentRecord:
        """Return the record with *slug*.

        Raises:
            NotFoundError: If no record in the snapshot has that slug.
        """
        for record in self._records:
            if record.slug == slug:
                return record
        raise NotFoundError()


class ContentCatalog:
    """Resolves the content catalog from a ``ContentSource``."""

    def __init__(
        self,
        source: ContentSource,
        *,
        route_prefix: str = DEFAULT_ROUTE_PREFIX,
        priority: float = DEFAULT_PRIORITY,
    ) -> None:
        self._source = source
        self._route_prefix = route_prefix
        self._priority = priority

    def snapshot(
        self,
        *,
        published_only: bool = True,
        timing: ServerTiming | None = None,
    ) -> CatalogSnapshot:
        """Read the source once and build a sorted snapshot.

        Only the source read is timed; normalization and sorting are not.

        Raises:
            SourceError: If the source cannot be read.
            FrontmatterError: If any record fails to normalize.
        """
        if timing is not None:
            raw_records = timing.time(TIMING_LABEL, self._source.fetch_all)
        else:
            raw_records = self._source.fetch_all()

        records = [normalize(raw) for raw in raw_records]
        if published_only:
            records = [r for r in records if r.published]

        logger.debug(
            "Resolved %d records from %s (published_only=%s)",
            len(records),
            self._source.name,
            published_only,
        )
        return CatalogSnapshot(
            sort_newest_first(records),
            route_prefix=self._route_prefix,
            priority=self._priority,
        )

    def list(self, tag: str | None = None) -> _list[ContentRecord]:
        """Published records, newest first, optionally restricted to *tag*."""
        return self.snapshot().list(tag)

    def tag_facets(self) -> _list[str]:
        """Tags across the full published catalog, regardless of any filter."""
        return self.snapshot().tag_facets()

    def sitemap_entries(self) -> _list[SitemapEntry]:
        """Sitemap routes for the listing page and every published record."""
        return self.snapshot().sitemap_entries()

    def get(self, slug: str) -> ContentRecord:
        """Published record by slug.

        Raises:
            NotFoundError: If the slug is unknown or unpublished.
        """
        return self.snapshot().get(slug)
