"""Server-Timing collection for a single request.

Wraps named phases, records their latency, and serializes the result as
a ``Server-Timing`` response header.
"""

from __future__ import annotations

import logging
import re
import time as _time
from collections.abc import Callable
from typing import TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TOKEN_INVALID = re.compile(r"[^A-Za-z0-9!#$%&'*+.^_`|~-]")


class TimingEntry(BaseModel):
    """One measured phase."""

    label: str
    duration_ms: float


class ServerTiming:
    """Collects timings for one request. Not shared between requests."""

    def __init__(self, clock: Callable[[], float] = _time.perf_counter) -> None:
        self._clock = clock
        self._entries: list[TimingEntry] = []

    def time(self, label: str, operation: Callable[[], T]) -> T:
        """Run *operation*, record its latency under *label*, return its result.

        The duration is recorded even when the operation raises; the
        exception propagates unchanged.
        """
        start = self._clock()
        try:
            return operation()
        finally:
            duration_ms = (self._clock() - start) * 1000
            self._entries.append(TimingEntry(label=label, duration_ms=duration_ms))
            logger.debug(
                "%s took %.1fms",
                label,
                duration_ms,
                extra={"label": label, "duration_ms": round(duration_ms, 1)},
            )

    def entries(self) -> list[TimingEntry]:
        """Return recorded timings in measurement order."""
        return list(self._entries)

    def header_value(self) -> str:
        """Format recorded timings as a ``Server-Timing`` header value."""
        return ", ".join(
            f"{_token(e.label)};dur={e.duration_ms:.1f}" for e in self._entries
        )

    def header(self) -> dict[str, str]:
        """Return ``{"Server-Timing": ...}``, or ``{}`` when nothing was timed."""
        if not self._entries:
            return {}
        return {"Server-Timing": self.header_value()}


def _token(label: str) -> str:
    cleaned = _TOKEN_INVALID.sub("_", label.strip())
    return cleaned or "unnamed"
