"""Tests for the file and relational content sources."""

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from folio.config import ContentSectionConfig
from folio.content.sources import (
    FileContentSource,
    SqlContentSource,
    create_source,
)
from folio.errors import SourceError


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# -- Files ------------------------------------------------------------------


class TestFileContentSource:
    def test_reads_markdown_and_mdx(self, tmp_path: Path):
        _write(tmp_path / "hello.md", "---\ntitle: Hello\n---\nbody")
        _write(tmp_path / "guides" / "forms.mdx", "---\ntitle: Forms\n---\nbody")
        _write(tmp_path / "notes.txt", "ignored")

        records = FileContentSource(tmp_path).fetch_all()

        assert sorted(r.default_slug for r in records) == ["forms", "hello"]
        assert all(r.slug is None for r in records)
        hello = next(r for r in records if r.default_slug == "hello")
        assert hello.frontmatter == "title: Hello\n"
        assert hello.body_ref.endswith("hello.md")

    def test_file_without_frontmatter_has_empty_blob(self, tmp_path: Path):
        _write(tmp_path / "bare.md", "# no frontmatter")
        [record] = FileContentSource(tmp_path).fetch_all()
        assert record.frontmatter == ""

    def test_empty_directory(self, tmp_path: Path):
        assert FileContentSource(tmp_path).fetch_all() == []

    def test_missing_directory_raises(self, tmp_path: Path):
        with pytest.raises(SourceError, match="not found"):
            FileContentSource(tmp_path / "nope").fetch_all()

    def test_undecodable_file_raises(self, tmp_path: Path):
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(SourceError):
            FileContentSource(tmp_path).fetch_all()

    def test_custom_patterns(self, tmp_path: Path):
        _write(tmp_path / "a.md", "---\ntitle: A\n---\n")
        _write(tmp_path / "b.markdown", "---\ntitle: B\n---\n")
        records = FileContentSource(tmp_path, patterns=("*.markdown",)).fetch_all()
        assert [r.default_slug for r in records] == ["b"]


# -- SQL --------------------------------------------------------------------


def _fake_connection(rows: list[tuple]) -> MagicMock:
    conn = MagicMock()
    cur = MagicMock()
    conn.cursor.return_value = cur
    cur.fetchall.return_value = rows
    return conn


class TestSqlContentSource:
    def test_maps_rows(self):
        conn = _fake_connection(
            [
                ("hello", "Hello", True, date(2024, 1, 2), '{"tags": "x, y"}'),
                ("draft", "Draft", False, None, None),
            ]
        )
        source = SqlContentSource("postgresql://localhost/site", connect=lambda url: conn)

        records = source.fetch_all()

        assert [r.slug for r in records] == ["hello", "draft"]
        assert records[0].published is True
        assert records[0].timestamp == date(2024, 1, 2)
        assert records[0].frontmatter == '{"tags": "x, y"}'
        assert records[0].body_ref == "content:hello"
        conn.close.assert_called_once()

    def test_query_uses_table(self):
        conn = _fake_connection([])
        SqlContentSource("postgresql://x", table="posts", connect=lambda url: conn).fetch_all()
        sql = conn.cursor.return_value.execute.call_args[0][0]
        assert "FROM posts" in sql

    def test_rejects_unsafe_table_name(self):
        with pytest.raises(ValueError):
            SqlContentSource("postgresql://x", table="content; DROP TABLE users")

    def test_no_url_raises(self):
        with pytest.raises(SourceError, match="No database URL"):
            SqlContentSource("").fetch_all()

    def test_malformed_row_raises_source_error(self):
        conn = _fake_connection([(42, "T", True, None, "[1, 2]")])
        source = SqlContentSource("postgresql://x", connect=lambda url: conn)
        with pytest.raises(SourceError, match="Malformed row in content") as exc_info:
            source.fetch_all()
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_connect_failure_propagates_as_source_error(self):
        def refuse(url: str):
            raise ConnectionError("refused")

        with pytest.raises(SourceError, match="refused") as exc_info:
            SqlContentSource("postgresql://x", connect=refuse).fetch_all()
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_query_failure_closes_connection(self):
        conn = _fake_connection([])
        conn.cursor.return_value.execute.side_effect = RuntimeError("relation missing")
        with pytest.raises(SourceError, match="relation missing"):
            SqlContentSource("postgresql://x", connect=lambda url: conn).fetch_all()
        conn.close.assert_called_once()

    @patch("folio.content.sources._HAS_PSYCOPG2", True)
    @patch("folio.content.sources.psycopg2")
    def test_defaults_to_psycopg2(self, mock_psycopg2: MagicMock):
        mock_psycopg2.connect.return_value = _fake_connection([])
        SqlContentSource("postgresql://localhost/site").fetch_all()
        mock_psycopg2.connect.assert_called_once_with("postgresql://localhost/site")

    @patch("folio.content.sources._HAS_PSYCOPG2", False)
    def test_missing_driver_raises(self):
        with pytest.raises(SourceError, match="psycopg2"):
            SqlContentSource("postgresql://localhost/site").fetch_all()


class TestCreateSource:
    def test_files(self):
        source = create_source(ContentSectionConfig(source="files", directory="posts"))
        assert isinstance(source, FileContentSource)
        assert source.name == "files"

    def test_sql(self):
        source = create_source(ContentSectionConfig(source="sql", db_url="postgresql://x"))
        assert isinstance(source, SqlContentSource)
        assert source.name == "sql"
