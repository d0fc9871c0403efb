"""Content listing, record lookup, and sitemap endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from folio.content.catalog import ContentCatalog
from folio.timing import ServerTiming

router = APIRouter(tags=["content"])


def _catalog(request: Request) -> ContentCatalog:
    return request.app.state.catalog


@router.get("/content")
def list_content(request: Request, tag: str | None = None) -> JSONResponse:
    """Published entries, newest first, plus the global tag facets.

    The source is read once per request; facets ignore the ``tag`` filter.
    """
    timing = ServerTiming()
    snapshot = _catalog(request).snapshot(timing=timing)

    return JSONResponse(
        content={
            "entries": [r.model_dump(mode="json") for r in snapshot.list(tag)],
            "tags": snapshot.tag_facets(),
            "current_tag": tag or None,
        },
        headers=timing.header(),
    )


@router.get("/content/{slug}")
def get_content(request: Request, slug: str) -> JSONResponse:
    timing = ServerTiming()
    record = _catalog(request).snapshot(timing=timing).get(slug)
    return JSONResponse(content=record.model_dump(mode="json"), headers=timing.header())


@router.get("/sitemap")
def sitemap(request: Request) -> list[dict]:
    return [e.model_dump() for e in _catalog(request).sitemap_entries()]
