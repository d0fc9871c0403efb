"""Identifier generation for newly created records."""

from __future__ import annotations

import re
import uuid

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    """Return a fresh random identifier.

    32 lowercase hex characters from a version-4 UUID: safe as a record
    key and as a URL path segment.
    """
    return uuid.uuid4().hex


def is_valid_id(value: object) -> bool:
    """Check whether *value* has the shape produced by :func:`new_id`."""
    return isinstance(value, str) and _ID_PATTERN.match(value) is not None
