"""Local keyed store: append-only create/read-all over one slot.

Backs interactive demos that simulate server-side persistence.  Each store
owns the slot named after it; the slot holds a JSON array of entries.  An
absent or unreadable slot is an empty store, never an error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from folio.ids import new_id
from folio.local.slots import SlotStorage

logger = logging.getLogger(__name__)


class Entry(BaseModel):
    """A stored record: the generated ``id`` plus the caller's payload fields."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str


_entries_adapter = TypeAdapter(list[Entry])


class LocalKeyedStore:
    """Create/read-all store scoped to one slot name.

    Reads the slot lazily on first access and writes the full sequence
    back after every create.  Not safe against concurrent writers sharing
    the same slot from other processes.
    """

    def __init__(
        self,
        name: str,
        slots: SlotStorage,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._name = name
        self._slots = slots
        self._id_factory = id_factory
        self._entries: list[Entry] | None = None

    @property
    def name(self) -> str:
        return self._name

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> list[Entry]:
        raw = self._slots.get_item(self._name)
        if raw is None:
            return []
        try:
            return _entries_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError):
            logger.warning(
                "Corrupt store %s, starting empty", self._name, extra={"store": self._name}
            )
            return []

    def _ensure_loaded(self) -> list[Entry]:
        if self._entries is None:
            self._entries = self._load()
        return self._entries

    def _save(self, entries: list[Entry]) -> None:
        payload = [e.model_dump(mode="json") for e in entries]
        self._slots.set_item(self._name, json.dumps(payload))

    # ── Operations ───────────────────────────────────────────────

    def find_all(self) -> list[Entry]:
        """Return every entry in creation order."""
        return list(self._ensure_loaded())

    def create_one(self, payload: Mapping[str, Any]) -> Entry:
        """Store *payload* under a fresh id and return the new entry.

        The generated id replaces any ``id`` key in the payload.  Equal
        payloads are never de-duplicated.  If the slot write fails, the
        error propagates and the store is left unchanged.
        """
        entry = Entry.model_validate({**dict(payload), "id": self._id_factory()})
        updated = [*self._ensure_loaded(), entry]
        self._save(updated)
        self._entries = updated
        logger.debug("Created %s in %s", entry.id, self._name, extra={"store": self._name})
        return entry
