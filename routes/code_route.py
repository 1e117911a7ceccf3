"""FastAPI routes for AI code actions on the active file."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.code_controller import edit_code, explain_code, fix_bugs

router = APIRouter(prefix="/api/code", tags=["code"])


class EditPayload(BaseModel):
    code: str
    instruction: str
    filename: str


class FilePayload(BaseModel):
    code: str
    filename: str


@router.post("/edit", summary="Edit the active file from an instruction")
async def edit_code_route(request: Request, payload: EditPayload):
    try:
        return await edit_code(request, payload.code, payload.instruction, payload.filename)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/explain", summary="Explain the active file")
async def explain_code_route(request: Request, payload: FilePayload):
    try:
        return await explain_code(request, payload.code, payload.filename)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/fix", summary="Fix bugs in the active file")
async def fix_bugs_route(request: Request, payload: FilePayload):
    try:
        return await fix_bugs(request, payload.code, payload.filename)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
