"""
Business logic for reviews.

This service accepts review submissions and lists stored reviews.  A
submission is validated first; only a valid submission reaches the
review store, so a rejected submission leaves no trace.  Moderation
and rating statistics are not part of this service.
"""

import logging
from typing import Any, List, Mapping, Optional

from ..core.errors import PersistenceError, ValidationError
from ..core.review_store import JsonReviewStore
from ..schemas.review import Review
from .review_validator import validate_review_submission


class ReviewService:
    """Service for handling product reviews."""

    def __init__(self, store: JsonReviewStore) -> None:
        self._store = store

    async def submit_review(self, raw: Mapping[str, Any]) -> Review:
        """Validate and store a review submission.

        ``raw`` holds the submitted ``productId``, ``rating`` and
        ``comment``.  Raises ``ValidationError`` listing every invalid
        field, or ``PersistenceError`` when the review could not be
        written.  Returns the stored review with its generated ``id``
        and ``createdAt``.
        """
        logger = logging.getLogger(__name__)
        try:
            candidate = validate_review_submission(raw)
        except ValidationError as e:
            logger.info("Rejected review submission, invalid fields: %s", ", ".join(e.fields))
            raise
        try:
            review = await self._store.append(candidate)
        except PersistenceError:
            raise
        except OSError as e:
            logger.error("Failed to store review for product %s: %s", candidate.product_id, e)
            raise PersistenceError() from e
        logger.info("Stored review %s for product %s (rating %s)", review.id, review.product_id, review.rating)
        return review

    async def list_reviews(self, product_id: Optional[str] = None) -> List[Review]:
        """Return stored reviews in insertion order, optionally for one product."""
        if product_id:
            return await self._store.list_for_product(product_id)
        return await self._store.list_all()
