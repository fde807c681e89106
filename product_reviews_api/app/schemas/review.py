"""
Pydantic schemas for product reviews.

Shoppers submit a star rating and a comment for a product.  The
submission is validated into a ``ReviewCandidate``; the review store
then stamps an identifier and creation time and returns a ``Review``.
Both the persisted JSON collection and the API use camelCase keys
(``productId``, ``createdAt``).
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000


class ReviewCandidate(BaseModel):
    """A validated submission that has not been stored yet."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: str = Field(..., alias="productId", description="Identifier of the reviewed product")
    rating: int = Field(..., description="Rating from 1 to 5")
    comment: str = Field(..., description="Review text, trimmed")

    @field_validator("product_id", mode="before")
    @classmethod
    def require_product_id(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            raise ValueError("productId is required")
        return str(v).strip()

    @field_validator("rating", mode="before")
    @classmethod
    def parse_rating(cls, v: Any) -> int:
        """Accept integers and integer strings, then enforce the 1..5 range."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("rating is required")
        # bool is an int subclass; a checkbox value is not a rating.
        if isinstance(v, bool):
            raise ValueError("rating must be a whole number")
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError("rating must be a whole number")
            v = int(v)
        elif isinstance(v, str):
            # int() also accepts non-ASCII digits such as "٥".
            if not v.strip().isascii():
                raise ValueError("rating must be a whole number")
            try:
                v = int(v.strip())
            except ValueError:
                raise ValueError("rating must be a whole number") from None
        elif not isinstance(v, int):
            raise ValueError("rating must be a whole number")
        if not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        return v

    @field_validator("comment", mode="before")
    @classmethod
    def sanitize_comment(cls, v: Any) -> str:
        """Trim whitespace from the comment and enforce a maximum length."""
        if v is None:
            raise ValueError("comment is required")
        if not isinstance(v, str):
            raise ValueError("comment must be text")
        v = v.strip()
        if not v:
            raise ValueError("comment must not be empty")
        if len(v) > MAX_COMMENT_LENGTH:
            raise ValueError(f"comment must be {MAX_COMMENT_LENGTH} characters or fewer")
        return v


class Review(BaseModel):
    """A stored review.  Never mutated after creation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    product_id: str = Field(..., alias="productId")
    rating: int
    comment: str
    # Older collections stored the timestamp under ``date``.
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("createdAt", "date", "created_at"),
        serialization_alias="createdAt",
    )

    def to_record(self) -> dict:
        """Return the JSON-ready dict written to the review collection."""
        return self.model_dump(mode="json", by_alias=True)


class ReviewSubmitted(BaseModel):
    """Response body for a successfully stored review."""

    message: str
    review: Review
