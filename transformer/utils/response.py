"""Response envelopes returned by every Transformer MCP tool.

Tools never raise to the MCP layer; they return ``{"ok": True, "data": ...}``
or ``{"ok": False, "error": {"message", "code", "details"}}``.
"""

from typing import Any, Dict, List, Optional


def is_success(result: Dict[str, Any]) -> bool:
    """True if a tool envelope reports success."""
    return bool(result.get("ok"))


def success_response(
    data: Any,
    warnings: Optional[List[str]] = None
) -> Dict[str, Any]:
    """Wrap tool output in a success envelope.

    Args:
        data: Payload, e.g. a run report or an operation listing
        warnings: Non-fatal notes to surface alongside the payload
    """
    response: Dict[str, Any] = {"ok": True, "data": data}
    if warnings:
        response["warnings"] = warnings
    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Wrap a failure in an error envelope.

    Args:
        message: Human-readable reason
        code: Machine-readable code (e.g. "UNKNOWN_CALL", "PROGRAM_FAILED")
        details: Extra context, such as the failed call's outcome
    """
    error: Dict[str, Any] = {"message": message}
    if code:
        error["code"] = code
    if details:
        error["details"] = details
    return {"ok": False, "error": error}
