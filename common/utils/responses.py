"""
JSON envelopes shared by every endpoint.

Success: ``{"success": true, "message": ..., "data": ...}``
Error:   ``{"success": false, "message": ..., "code": ..., "errors": ...}``
"""

from typing import Any, Optional, Dict


def success_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    """Wrap a payload in the success envelope. ``data`` is always present, possibly null."""
    return {"success": True, "message": message, "data": data}


def error_response(
    message: str,
    code: Optional[str] = None,
    errors: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Build the error envelope.

    Args:
        message: Human-readable error message
        code: Machine-readable error kind (e.g. "NOT_FOUND"), omitted when None
        errors: Field-level details such as ``[{"field", "message"}]``, omitted when None
    """
    body: Dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    if errors is not None:
        body["errors"] = errors
    return body
