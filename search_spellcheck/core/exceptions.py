"""
Custom Exception Classes for the Application
Provides a unified error handling system with proper HTTP status codes and messages.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """
    Base exception class for all application exceptions.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(
            status_code=status_code,
            detail={
                "error_code": error_code,
                "message": message,
                "details": self.details,
            },
            headers=headers,
        )


# ==================== Views ====================


class ViewNotFoundException(AppException):
    """Raised when a requested view id is not registered."""

    def __init__(self, view_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="view_not_found",
            message=f"View '{view_id}' not found",
            details={"view_id": view_id},
        )


# ==================== Search backend ====================


class SearchBackendException(AppException):
    """Raised when the search backend cannot be reached or answers with an error."""

    def __init__(self, message: str = "Search backend request failed", details=None):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code="search_backend_error",
            message=message,
            details=details,
        )


__all__ = [
    "AppException",
    "SearchBackendException",
    "ViewNotFoundException",
]
