"""Frontmatter parsing and record normalization.

Turns a ``RawContentRecord`` with heterogeneous frontmatter (a mapping, a
YAML or JSON text blob, or nothing) into a ``ContentRecord``.  Parse and
validation failures raise ``FrontmatterError``; no default record is ever
substituted.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import yaml
from pydantic import ValidationError

from folio.content.models import ContentRecord, RawContentRecord
from folio.errors import FrontmatterError

FENCE = "---"


def split_frontmatter(text: str) -> tuple[str, str]:
    """Split a markdown document into ``(frontmatter_text, body)``.

    The frontmatter block must open on the first line with ``---`` and
    close with another ``---`` line.  Documents without one return
    ``("", text)``.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FENCE:
        return "", text

    for i in range(1, len(lines)):
        if lines[i].strip() == FENCE:
            return "".join(lines[1:i]), "".join(lines[i + 1 :])

    return "", text


def parse_frontmatter_blob(blob: Mapping[str, Any] | str | None) -> dict[str, Any]:
    """Deserialize a frontmatter blob into a plain dict.

    Mappings pass through.  Text is parsed with ``yaml.safe_load`` (JSON
    is a subset of YAML, so serialized JSON columns work too).

    Raises:
        FrontmatterError: If the text does not parse or is not a mapping.
    """
    if blob is None:
        return {}
    if isinstance(blob, Mapping):
        return dict(blob)
    if not blob.strip():
        return {}

    try:
        data = yaml.safe_load(blob)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"Frontmatter is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data


def split_tags(raw: Any) -> tuple[str, ...]:
    """Split a raw tags value into trimmed, non-empty tags.

    A string is split on commas.  A list (YAML sequence) is taken as
    already split.  Order is preserved; nothing is sorted or de-duplicated.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        segments: list[Any] = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        segments = list(raw)
    else:
        segments = [raw]

    tags: list[str] = []
    for segment in segments:
        if segment is None:
            continue
        tag = str(segment).strip()
        if tag:
            tags.append(tag)
    return tuple(tags)


def _coerce_date(value: Any) -> date | None:
    """Accept a date, a datetime, or an ISO 8601 string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def normalize(raw: RawContentRecord) -> ContentRecord:
    """Normalize one raw record.

    Record-level fields take precedence over frontmatter fields.

    Raises:
        FrontmatterError: On unparsable frontmatter, a missing slug or
            title, or an unreadable timestamp.
    """
    label = raw.slug or raw.body_ref or "<unknown>"
    try:
        fm = parse_frontmatter_blob(raw.frontmatter)
    except FrontmatterError as exc:
        raise FrontmatterError(f"{label}: {exc.message}", record=label) from exc

    slug = _first_present(raw.slug, fm.get("slug"), raw.default_slug)
    title = _first_present(raw.title, fm.get("title"))
    if not slug or not title:
        missing = "slug" if not slug else "title"
        raise FrontmatterError(f"{label}: missing {missing}", record=label)

    try:
        timestamp = _coerce_date(
            _first_present(raw.timestamp, fm.get("timestamp"), fm.get("date"))
        )
    except ValueError as exc:
        raise FrontmatterError(f"{label}: invalid timestamp ({exc})", record=label) from exc

    published = _first_present(raw.published, fm.get("published"))

    try:
        return ContentRecord(
            slug=str(slug),
            title=str(title),
            timestamp=timestamp,
            tags=split_tags(fm.get("tags")),
            published=False if published is None else published,
            description=fm.get("description"),
            body_ref=raw.body_ref,
        )
    except ValidationError as exc:
        raise FrontmatterError(f"{label}: {exc}", record=label) from exc
