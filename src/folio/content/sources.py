"""Content sources: interchangeable backends behind one read contract.

Each source implements ``fetch_all()`` and returns an unordered list of
``RawContentRecord``.  Failures raise ``SourceError``; a source never
reports an unreachable backend as an empty catalog.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from folio.config import ContentSectionConfig
from folio.content.frontmatter import split_frontmatter
from folio.content.models import RawContentRecord
from folio.errors import SourceError

logger = logging.getLogger(__name__)

try:
    import psycopg2

    _HAS_PSYCOPG2 = True
except ImportError:
    psycopg2 = None  # type: ignore[assignment]
    _HAS_PSYCOPG2 = False

DEFAULT_PATTERNS = ("*.md", "*.mdx")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class ContentSource(ABC):
    """Base class for content backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend name for logs and errors."""

    @abstractmethod
    def fetch_all(self) -> list[RawContentRecord]:
        """Return every content record the backend holds.

        Raises:
            SourceError: If the backend cannot be read.
        """


class FileContentSource(ContentSource):
    """Markdown/MDX files with a leading ``---`` frontmatter block."""

    def __init__(
        self,
        directory: str | Path,
        patterns: Sequence[str] = DEFAULT_PATTERNS,
    ) -> None:
        self._directory = Path(directory)
        self._patterns = tuple(patterns)

    @property
    def name(self) -> str:
        return "files"

    def fetch_all(self) -> list[RawContentRecord]:
        if not self._directory.is_dir():
            raise SourceError(
                f"Content directory not found: {self._directory}", source=self.name
            )

        paths: set[Path] = set()
        for pattern in self._patterns:
            paths.update(p for p in self._directory.rglob(pattern) if p.is_file())

        records: list[RawContentRecord] = []
        for path in sorted(paths):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceError(f"Cannot read {path}: {exc}", source=self.name) from exc

            frontmatter, _body = split_frontmatter(text)
            records.append(
                RawContentRecord(
                    frontmatter=frontmatter,
                    body_ref=str(path),
                    default_slug=path.stem,
                )
            )

        logger.info("Read %d content files from %s", len(records), self._directory)
        return records


class SqlContentSource(ContentSource):
    """Relational backend: one row per record in a content table.

    Expects columns ``slug, title, published, timestamp, frontmatter``
    where ``frontmatter`` is JSON/YAML text or a json/jsonb column.
    """

    def __init__(
        self,
        db_url: str,
        table: str = "content",
        connect: Callable[[str], Any] | None = None,
    ) -> None:
        if not _IDENTIFIER.match(table):
            raise ValueError(f"Invalid table name: {table!r}")
        self._db_url = db_url
        self._table = table
        self._connect = connect

    @property
    def name(self) -> str:
        return "sql"

    def _open(self) -> Any:
        if self._connect is not None:
            return self._connect(self._db_url)
        if not _HAS_PSYCOPG2:
            raise SourceError(
                "psycopg2 not installed. pip install psycopg2-binary", source=self.name
            )
        return psycopg2.connect(self._db_url)

    def fetch_all(self) -> list[RawContentRecord]:
        if not self._db_url:
            raise SourceError("No database URL configured", source=self.name)

        try:
            conn = self._open()
        except SourceError:
            raise
        except Exception as exc:
            raise SourceError(f"Cannot connect to content database: {exc}", source=self.name) from exc

        try:
            cur = conn.cursor()
            try:
                cur.execute(
                    f"SELECT slug, title, published, timestamp, frontmatter "  # noqa: S608
                    f"FROM {self._table}"
                )
                rows = cur.fetchall()
            finally:
                cur.close()
        except Exception as exc:
            raise SourceError(f"Content query failed: {exc}", source=self.name) from exc
        finally:
            conn.close()

        try:
            records = [
                RawContentRecord(
                    slug=slug,
                    title=title,
                    published=published,
                    timestamp=timestamp,
                    frontmatter=frontmatter,
                    body_ref=f"{self._table}:{slug}",
                )
                for slug, title, published, timestamp, frontmatter in rows
            ]
        except ValidationError as exc:
            raise SourceError(f"Malformed row in {self._table}: {exc}", source=self.name) from exc
        logger.info("Read %d content rows from %s", len(records), self._table)
        return records


def create_source(config: ContentSectionConfig) -> ContentSource:
    """Create the content source named in the ``[content]`` config.

    Raises:
        ValueError: If the source is unknown.
    """
    if config.source == "files":
        return FileContentSource(config.directory)
    if config.source == "sql":
        return SqlContentSource(config.db_url, table=config.table)
    raise ValueError(f"Unknown content source: {config.source!r}")
