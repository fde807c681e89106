"""
Validation of raw review submissions.

``validate_review_submission`` turns the raw form fields into a
``ReviewCandidate`` or raises ``ValidationError`` naming every invalid
field at once, so the client can report all problems in one round trip.
The function is pure; it never touches the store.
"""

from typing import Any, Dict, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ValidationError
from ..schemas.review import ReviewCandidate

# Python attribute names reported by pydantic -> public field names.
_FIELD_NAMES = {"product_id": "productId", "productId": "productId", "rating": "rating", "comment": "comment"}


def _describe(error: Dict[str, Any], field: str) -> str:
    if error.get("type") == "missing":
        return f"{field} is required"
    ctx_error = (error.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    return error.get("msg", "invalid value")


def validate_review_submission(raw: Mapping[str, Any]) -> ReviewCandidate:
    """Validate ``productId``, ``rating`` and ``comment`` from ``raw``."""
    try:
        return ReviewCandidate.model_validate(dict(raw))
    except PydanticValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            loc = err.get("loc") or ("submission",)
            field = _FIELD_NAMES.get(str(loc[0]), str(loc[0]))
            # Keep the first message per field.
            errors.setdefault(field, _describe(err, field))
        raise ValidationError(errors) from None
