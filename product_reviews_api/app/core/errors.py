"""
Error taxonomy shared by the services and the HTTP layer.

Every failure a caller can observe is one of the subclasses of
``ReviewAppError`` below.  Each carries the HTTP status the request
layer responds with, so handlers map errors by type rather than by
inspecting message text.
"""

from typing import Dict, List, Optional


class ReviewAppError(Exception):
    """Base class for all classified service errors."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, object]:
        return {"error": self.message}


class Unauthorized(ReviewAppError):
    """Session missing, incomplete or not acceptable."""

    status_code = 401
    default_message = "Unauthorized"


class BadRequest(ReviewAppError):
    """A required input was not supplied."""

    status_code = 400
    default_message = "Bad Request"


class UpstreamUnavailable(ReviewAppError):
    """The commerce API could not be reached (network failure or timeout)."""

    status_code = 502
    default_message = "Upstream service unavailable"


class UpstreamRequestFailed(ReviewAppError):
    """The commerce API answered with a non-success status."""

    status_code = 502
    default_message = "Failed to fetch product details"

    def __init__(self, upstream_status: int, message: Optional[str] = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(message)

    def to_dict(self) -> Dict[str, object]:
        return {"error": self.message, "upstreamStatus": self.upstream_status}


class ProductNotFound(ReviewAppError):
    """The commerce API answered but returned no product."""

    status_code = 404
    default_message = "Product not found"


class ValidationError(ReviewAppError):
    """One or more submitted review fields are invalid.

    ``fields`` lists every offending field name and ``errors`` maps each
    of them to a human-readable explanation.
    """

    status_code = 400
    default_message = "Invalid review submission"

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None) -> None:
        self.errors = dict(errors)
        self.fields: List[str] = list(self.errors)
        super().__init__(message or f"Invalid fields: {', '.join(self.fields)}")

    def to_dict(self) -> Dict[str, object]:
        return {"error": self.message, "fields": self.fields, "details": self.errors}


class PersistenceError(ReviewAppError):
    """The review store could not durably record a review."""

    status_code = 500
    default_message = "Failed to save review"
