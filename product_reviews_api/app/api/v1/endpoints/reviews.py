"""
API endpoints for product reviews.

Shoppers submit reviews as form posts, either to ``/reviews`` with the
product id as a form field or to ``/products/{product_id}/reviews``
with the id in the path.  Stored reviews can be listed for all
products or for one product.  Invalid submissions get a 400 naming
every invalid field; storage failures get a 500.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Query, status

from ....schemas.error import ErrorResponse
from ....schemas.review import Review, ReviewSubmitted
from ....services.review_service import ReviewService
from ...deps import get_review_service

router = APIRouter()

SUCCESS_MESSAGE = "Review saved successfully"

_SUBMIT_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/reviews",
    response_model=ReviewSubmitted,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review",
    responses=_SUBMIT_RESPONSES,
)
async def create_review(
    product_id: Optional[str] = Form(None, alias="productId"),
    rating: Optional[str] = Form(None),
    comment: Optional[str] = Form(None),
    service: ReviewService = Depends(get_review_service),
) -> ReviewSubmitted:
    """Store a review for the product named in the ``productId`` field."""
    review = await service.submit_review({"productId": product_id, "rating": rating, "comment": comment})
    return ReviewSubmitted(message=SUCCESS_MESSAGE, review=review)


@router.post(
    "/products/{product_id}/reviews",
    response_model=ReviewSubmitted,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review for a product",
    responses=_SUBMIT_RESPONSES,
)
async def create_product_review(
    product_id: str,
    rating: Optional[str] = Form(None),
    comment: Optional[str] = Form(None),
    service: ReviewService = Depends(get_review_service),
) -> ReviewSubmitted:
    review = await service.submit_review({"productId": product_id, "rating": rating, "comment": comment})
    return ReviewSubmitted(message=SUCCESS_MESSAGE, review=review)


@router.get(
    "/reviews",
    response_model=List[Review],
    summary="List reviews",
)
async def list_reviews(
    product_id: Optional[str] = Query(None, alias="productId"),
    service: ReviewService = Depends(get_review_service),
) -> List[Review]:
    """List stored reviews in submission order, optionally for one product."""
    return await service.list_reviews(product_id)


@router.get(
    "/products/{product_id}/reviews",
    response_model=List[Review],
    summary="List reviews for a product",
)
async def list_product_reviews(
    product_id: str,
    service: ReviewService = Depends(get_review_service),
) -> List[Review]:
    return await service.list_reviews(product_id)
