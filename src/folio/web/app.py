"""folio API: FastAPI application factory.

Routes are registered explicitly.  The catalog and the slot container
are built once per app and reached by handlers through ``app.state``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from folio import __version__
from folio.config import FolioConfig, load_config
from folio.content.catalog import ContentCatalog
from folio.content.sources import create_source
from folio.local.slots import FileSlots, SlotStorage
from folio.web.error_handlers import register_error_handlers
from folio.web.routes import content, demos, health

logger = logging.getLogger(__name__)


def create_app(
    config: FolioConfig | None = None,
    *,
    catalog: ContentCatalog | None = None,
    slots: SlotStorage | None = None,
) -> FastAPI:
    """Build the API. Explicit *catalog* / *slots* override the config."""
    config = config or load_config()

    app = FastAPI(title="folio", version=__version__)
    app.state.config = config
    app.state.catalog = catalog or ContentCatalog(
        create_source(config.content),
        route_prefix=config.sitemap.route_prefix,
        priority=config.sitemap.priority,
    )
    app.state.slots = slots or FileSlots(config.store.path)

    app.include_router(health.router)
    app.include_router(content.router)
    app.include_router(demos.router)
    register_error_handlers(app)

    logger.info("folio API configured (content source: %s)", config.content.source)
    return app
