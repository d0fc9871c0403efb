"""folio -- content catalog and demo store for a personal site."""

__version__ = "0.1.0"
