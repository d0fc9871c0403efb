"""Tests for frontmatter parsing and record normalization."""

from datetime import date, datetime

import pytest

from folio.content.frontmatter import (
    normalize,
    parse_frontmatter_blob,
    split_frontmatter,
    split_tags,
)
from folio.content.models import RawContentRecord
from folio.errors import FrontmatterError


class TestSplitTags:
    def test_none_is_empty(self):
        assert split_tags(None) == ()

    def test_empty_string_is_empty(self):
        assert split_tags("") == ()

    def test_splits_and_trims(self):
        assert split_tags("x, y") == ("x", "y")

    def test_drops_empty_segments(self):
        assert split_tags(" remix, ,react,, ") == ("remix", "react")

    def test_preserves_raw_order(self):
        assert split_tags("zod, apple, mango") == ("zod", "apple", "mango")

    def test_yaml_list_is_already_split(self):
        assert split_tags(["remix ", "", " forms"]) == ("remix", "forms")

    def test_duplicates_kept_at_record_level(self):
        assert split_tags("a, a") == ("a", "a")


class TestSplitFrontmatter:
    def test_extracts_block_and_body(self):
        text = "---\ntitle: Hello\n---\n# Body\n"
        fm, body = split_frontmatter(text)
        assert fm == "title: Hello\n"
        assert body == "# Body\n"

    def test_no_block(self):
        text = "# Just a body\n"
        assert split_frontmatter(text) == ("", text)

    def test_unclosed_block_is_body(self):
        text = "---\ntitle: Hello\n"
        assert split_frontmatter(text) == ("", text)

    def test_handles_bom_and_crlf(self):
        fm, body = split_frontmatter("\ufeff---\r\ntitle: Hi\r\n---\r\nbody")
        assert "title: Hi" in fm
        assert body == "body"


class TestParseFrontmatterBlob:
    def test_mapping_passes_through(self):
        assert parse_frontmatter_blob({"title": "A"}) == {"title": "A"}

    def test_none_and_blank(self):
        assert parse_frontmatter_blob(None) == {}
        assert parse_frontmatter_blob("   ") == {}

    def test_yaml_text(self):
        data = parse_frontmatter_blob("title: A\ntags: x, y\npublished: true\n")
        assert data == {"title": "A", "tags": "x, y", "published": True}

    def test_json_text(self):
        data = parse_frontmatter_blob('{"title": "A", "published": false}')
        assert data == {"title": "A", "published": False}

    def test_invalid_yaml_raises(self):
        with pytest.raises(FrontmatterError):
            parse_frontmatter_blob("title: [unclosed\n")

    def test_non_mapping_raises(self):
        with pytest.raises(FrontmatterError, match="mapping"):
            parse_frontmatter_blob("- just\n- a list\n")


class TestNormalize:
    def test_full_record_from_text(self):
        raw = RawContentRecord(
            frontmatter=(
                "title: Hello\nslug: hello\ntimestamp: 2024-03-01\n"
                "tags: remix, forms\npublished: true\ndescription: Hi\n"
            ),
            body_ref="content/hello.md",
        )
        record = normalize(raw)
        assert record.slug == "hello"
        assert record.title == "Hello"
        assert record.timestamp == date(2024, 3, 1)
        assert record.tags == ("remix", "forms")
        assert record.published is True
        assert record.description == "Hi"
        assert record.body_ref == "content/hello.md"

    def test_published_defaults_false(self):
        record = normalize(RawContentRecord(slug="a", title="A"))
        assert record.published is False
        assert record.tags == ()
        assert record.timestamp is None

    def test_record_fields_win_over_frontmatter(self):
        raw = RawContentRecord(
            slug="row-slug",
            title="Row title",
            published=False,
            frontmatter={"slug": "fm-slug", "title": "FM title", "published": True},
        )
        record = normalize(raw)
        assert record.slug == "row-slug"
        assert record.title == "Row title"
        assert record.published is False

    def test_default_slug_used_last(self):
        raw = RawContentRecord(frontmatter="title: A\n", default_slug="from-file")
        assert normalize(raw).slug == "from-file"

        raw = RawContentRecord(frontmatter="title: A\nslug: declared\n", default_slug="from-file")
        assert normalize(raw).slug == "declared"

    def test_date_key_is_timestamp_fallback(self):
        raw = RawContentRecord(slug="a", title="A", frontmatter="date: 2023-12-24\n")
        assert normalize(raw).timestamp == date(2023, 12, 24)

    def test_datetime_truncated_to_date(self):
        raw = RawContentRecord(slug="a", title="A", timestamp=datetime(2024, 5, 6, 13, 45))
        assert normalize(raw).timestamp == date(2024, 5, 6)

    def test_iso_datetime_string(self):
        raw = RawContentRecord(slug="a", title="A", timestamp="2024-05-06T13:45:00+00:00")
        assert normalize(raw).timestamp == date(2024, 5, 6)

    def test_bad_timestamp_raises(self):
        raw = RawContentRecord(slug="a", title="A", timestamp="last tuesday")
        with pytest.raises(FrontmatterError, match="timestamp"):
            normalize(raw)

    def test_missing_title_raises(self):
        with pytest.raises(FrontmatterError, match="title"):
            normalize(RawContentRecord(slug="a"))

    def test_missing_slug_raises(self):
        with pytest.raises(FrontmatterError, match="slug"):
            normalize(RawContentRecord(title="A"))

    def test_malformed_frontmatter_propagates(self):
        raw = RawContentRecord(slug="broken", frontmatter="title: [oops\n")
        with pytest.raises(FrontmatterError) as exc_info:
            normalize(raw)
        assert exc_info.value.record == "broken"

    def test_record_is_immutable(self):
        record = normalize(RawContentRecord(slug="a", title="A"))
        with pytest.raises(Exception):
            record.title = "B"  # type: ignore[misc]
