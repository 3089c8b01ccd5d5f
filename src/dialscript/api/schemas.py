"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dialscript.models.corrections import CorrectionCandidate
from dialscript.models.diagnostics import Diagnostic


class ScriptRequest(BaseModel):
    """Request body for POST /scripts/validate and POST /scripts/fix."""

    script: str = Field(description="DialScript source text")


class ValidateResponse(BaseModel):
    """Response body for POST /scripts/validate."""

    valid: bool
    total_lines: int
    error_count: int
    diagnostics: list[Diagnostic] = []


class FixResponse(BaseModel):
    """Response body for POST /scripts/fix."""

    script: str = Field(description="Script text after applying all fixes")
    corrections: list[CorrectionCandidate] = []
    converged: bool
    error_count: int
    diagnostics: list[Diagnostic] = Field(
        default=[], description="Diagnostics that remain after fixing"
    )


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str
    version: str
