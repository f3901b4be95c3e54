"""Errors raised while validating requests and calling Shopify."""

from typing import Any, Dict, Optional
from fastapi import status


class ProductCreatorError(Exception):
    """
    Base error carrying the HTTP status and JSON body to answer with.

    Args:
        error: Human readable error message
        details: Optional extra payload echoed to the caller
        status_code: HTTP status code of the response
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        error: str,
        details: Any = None,
        status_code: Optional[int] = None,
    ):
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidPrice(ProductCreatorError):
    """Price missing, not numeric or not positive."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, error: str = "Invalid price. Price must be a positive number."):
        super().__init__(error)


class MissingTitle(ProductCreatorError):
    """Title missing or blank where one is required."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, error: str = "Title is required."):
        super().__init__(error)


class UpstreamUserError(ProductCreatorError):
    """Shopify accepted the call but reported field-level errors."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, user_errors: list):
        super().__init__("Shopify API Error", details=user_errors)
        self.user_errors = user_errors


class UpstreamTransportError(ProductCreatorError):
    """Network, auth or unexpected failure talking to Shopify."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__("Failed to create product", details=message)


class InvalidRequestBody(ProductCreatorError):
    """Request body that is not a readable JSON object or form."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, details: Any = None):
        super().__init__("Invalid request body.", details=details)
