"""Custom exceptions for the GlowMatch API.

Each exception carries the HTTP status code it should be reported with. The
application renders them as ``{"error": message}``.
"""

from typing import Any, Dict, Optional


class GlowMatchException(Exception):
    """Base exception for GlowMatch errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Client-facing error message
            status_code: HTTP status code for API responses
            details: Additional error details for logging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


def _error_details(error: Exception) -> Dict[str, Any]:
    return {"error": str(error), "error_type": type(error).__name__}


class CatalogUnavailableError(GlowMatchException):
    """Raised when the published catalog cannot be fetched."""

    def __init__(self, error: Exception):
        super().__init__(
            message="Failed to fetch products",
            status_code=500,
            details=_error_details(error),
        )


class ProductNotFoundError(GlowMatchException):
    """Raised when a product does not exist or is not published."""

    def __init__(self, product_id: str):
        super().__init__(
            message="Product not found",
            status_code=404,
            details={"product_id": product_id},
        )


class ProductLookupError(GlowMatchException):
    """Raised when a single product cannot be read."""

    def __init__(self, product_id: str, error: Exception):
        details = _error_details(error)
        details["product_id"] = product_id
        super().__init__(
            message="Failed to fetch product",
            status_code=500,
            details=details,
        )


class ViewTrackingError(GlowMatchException):
    """Raised when a product view cannot be recorded."""

    def __init__(self, product_id: str, error: Exception):
        details = _error_details(error)
        details["product_id"] = product_id
        super().__init__(
            message="Failed to track view",
            status_code=500,
            details=details,
        )
