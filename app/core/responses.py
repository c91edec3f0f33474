"""
Standard API response helpers.

Every JSON endpoint answers with one of two envelopes:

    success: {"success": true, "message": ..., "data": ..., "timestamp": ...}
    error:   {"success": false, "error": ..., "timestamp": ..., "details"?: [...]}
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _timestamp() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def success_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response payload; an empty list stands in for "no data"
        message: Human-readable success message
    """
    return {
        "success": True,
        "message": message,
        "data": data if data is not None else [],
        "timestamp": _timestamp(),
    }


def error_response(message: str, details: Optional[List[Any]] = None) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        details: Optional list of specific errors (validation failures)
    """
    response: Dict[str, Any] = {
        "success": False,
        "error": message,
        "timestamp": _timestamp(),
    }

    if details:
        response["details"] = details

    return response
