"""HTTP surface for the content catalog and demos."""

from folio.web.app import create_app

__all__ = ["create_app"]
