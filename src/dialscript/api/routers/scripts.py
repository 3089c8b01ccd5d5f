"""Script endpoints: validation and auto-fix of DialScript text."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dialscript.api.deps import get_script_checker
from dialscript.api.schemas import FixResponse, ScriptRequest, ValidateResponse
from dialscript.parser.loader import ScriptSizeError
from dialscript.service.script_checker import ScriptChecker

router = APIRouter()


@router.post("/validate", response_model=ValidateResponse)
async def validate_script(
    body: ScriptRequest,
    checker: ScriptChecker = Depends(get_script_checker),  # noqa: B008
) -> ValidateResponse:
    """Validate a script and return every diagnostic found."""
    try:
        result = checker.validate_text(body.script)
    except ScriptSizeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return ValidateResponse(
        valid=result.valid,
        total_lines=result.total_lines,
        error_count=result.error_count,
        diagnostics=result.diagnostics,
    )


@router.post("/fix", response_model=FixResponse)
async def fix_script(
    body: ScriptRequest,
    checker: ScriptChecker = Depends(get_script_checker),  # noqa: B008
) -> FixResponse:
    """Apply automatic fixes and return the corrected script."""
    try:
        result = checker.fix_text(body.script)
    except ScriptSizeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return FixResponse(
        script=result.to_text(),
        corrections=result.corrections,
        converged=result.converged,
        error_count=result.validation.error_count,
        diagnostics=result.validation.diagnostics,
    )
