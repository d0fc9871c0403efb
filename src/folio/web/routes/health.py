"""Liveness probe."""

from fastapi import APIRouter, status

from folio import __version__

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
def health_check() -> dict:
    """Returns 200 if the process is up."""
    return {"status": "healthy", "service": "folio", "version": __version__}
