"""Local persistence for demo components."""

from folio.local.slots import FileSlots, MemorySlots, SlotStorage
from folio.local.store import Entry, LocalKeyedStore

__all__ = [
    "Entry",
    "FileSlots",
    "LocalKeyedStore",
    "MemorySlots",
    "SlotStorage",
]
