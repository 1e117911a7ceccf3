"""Controller for code edit, explain and fix actions."""

from typing import Any, Dict

from fastapi import Request

from controllers.error_mapping import get_gemini_service, to_http_exception


async def edit_code(request: Request, code: str, instruction: str, filename: str) -> Dict[str, Any]:
    """Apply ``instruction`` to the file and return the (possibly unchanged) code."""
    if not instruction.strip():
        raise to_http_exception(ValueError("Instruction must not be empty."), "edit code")
    service = get_gemini_service(request)
    try:
        updated = await service.edit_code(code, instruction, filename)
    except Exception as exc:
        raise to_http_exception(exc, "edit code") from exc
    return {"filename": filename, "code": updated, "changed": updated != code}


async def explain_code(request: Request, code: str, filename: str) -> Dict[str, Any]:
    """Return a detailed explanation of the file."""
    service = get_gemini_service(request)
    try:
        explanation = await service.explain_code(code, filename)
    except Exception as exc:
        raise to_http_exception(exc, "explain code") from exc
    return {"filename": filename, "explanation": explanation}


async def fix_bugs(request: Request, code: str, filename: str) -> Dict[str, Any]:
    """Return the file with bugs and performance issues fixed."""
    service = get_gemini_service(request)
    try:
        fixed = await service.fix_bugs(code, filename)
    except Exception as exc:
        raise to_http_exception(exc, "fix code") from exc
    return {"filename": filename, "code": fixed, "changed": fixed != code}
