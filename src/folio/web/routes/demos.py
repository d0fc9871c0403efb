"""Endpoints for the UI-component demos."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from folio.demos.combobox import load_combobox, submit_combobox

router = APIRouter(prefix="/ui", tags=["demos"])


class ComboboxSubmission(BaseModel):
    genre_ids: list[str] = Field(default_factory=list)
    new_genre_names: list[str] = Field(default_factory=list)


@router.get("/combobox")
def get_combobox(request: Request) -> dict:
    state = load_combobox(request.app.state.slots)
    return state.model_dump(mode="json")


@router.post("/combobox")
def post_combobox(request: Request, submission: ComboboxSubmission) -> dict:
    selected = submit_combobox(
        request.app.state.slots,
        submission.genre_ids,
        submission.new_genre_names,
    )
    return {"selected_genre_ids": selected}
