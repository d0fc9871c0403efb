"""Combobox demo: a genre picker that can create new genres on submit.

Genres live in a local keyed store seeded with a few defaults; the
current selection is kept as a comma-joined id list in its own slot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from folio.local.slots import SlotStorage
from folio.local.store import Entry, LocalKeyedStore

logger = logging.getLogger(__name__)

GENRES_STORE = "combobox:genres"
SELECTED_SLOT = "combobox:selectedGenreIds"
DEFAULT_GENRES = ("Rock", "Pop", "Jazz")


class ComboboxState(BaseModel):
    """What the demo needs to render."""

    genres: list[Entry] = Field(default_factory=list)
    selected_genre_ids: list[str] = Field(default_factory=list)


def load_combobox(slots: SlotStorage) -> ComboboxState:
    """Return the genres and current selection, seeding defaults on first use."""
    db = LocalKeyedStore(GENRES_STORE, slots)
    if not db.find_all():
        logger.info("Seeding %d default genres", len(DEFAULT_GENRES))
        for genre in DEFAULT_GENRES:
            db.create_one({"name": genre})

    raw_selected = slots.get_item(SELECTED_SLOT)
    return ComboboxState(
        genres=db.find_all(),
        selected_genre_ids=raw_selected.split(",") if raw_selected else [],
    )


def submit_combobox(
    slots: SlotStorage,
    genre_ids: Iterable[str],
    new_genre_names: Iterable[str] = (),
) -> list[str]:
    """Create any new genres and store the combined selection.

    Returns the stored selection: existing ids followed by the ids of the
    newly created genres, duplicates dropped.
    """
    db = LocalKeyedStore(GENRES_STORE, slots)
    new_ids = [db.create_one({"name": str(name)}).id for name in new_genre_names]

    selected = list(dict.fromkeys([*(str(i) for i in genre_ids), *new_ids]))
    slots.set_item(SELECTED_SLOT, ",".join(selected))
    return selected
