"""Reference endpoint: GET /reference/dialscript."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from dialscript.reference import DIALSCRIPT_REFERENCE, EXAMPLE_SCRIPT

router = APIRouter()


class ReferenceResponse(BaseModel):
    """Response for GET /reference/dialscript."""

    reference: str = Field(description="DialScript format reference text")
    example: str = Field(description="A complete, valid example script")


@router.get("/dialscript", response_model=ReferenceResponse)
async def get_dialscript_reference() -> ReferenceResponse:
    """Return the full DialScript format reference."""
    return ReferenceResponse(reference=DIALSCRIPT_REFERENCE, example=EXAMPLE_SCRIPT)
