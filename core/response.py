"""
Standardized API response helpers for consistent data structure
"""
from typing import Any, Dict, Optional
from datetime import datetime


def success_response(
    data: Any = None,
    message: str = "Operation successful",
    meta: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create a success response"""
    body = {
        "success": True,
        "data": data,
        "message": message,
        "timestamp": datetime.utcnow().isoformat()
    }
    if meta:
        body["meta"] = meta
    return body


def error_response(
    error: str,
    message: Optional[str] = None,
    details: Any = None,
    **extra: Any
) -> Dict[str, Any]:
    """Create an error response"""
    body = {
        "success": False,
        "error": error,
    }
    if message is not None:
        body["message"] = message
    if details is not None:
        body["details"] = details
    body.update(extra)
    return body


def not_found_response(path: str) -> Dict[str, Any]:
    """Body returned for any path no router handles"""
    return error_response(
        "Endpoint not found",
        message=f"The requested endpoint '{path}' does not exist.",
        path=path
    )
