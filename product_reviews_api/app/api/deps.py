"""
Dependency providers for API routes.

Services are built from objects created once per application in
``create_app`` and kept on ``app.state``.  Tests replace them through
``app.dependency_overrides``.
"""

from fastapi import Request

from ..core.review_store import JsonReviewStore
from ..services.product_service import ProductService
from ..services.review_service import ReviewService
from ..services.shopify_client import ShopifyProductClient


def get_review_store(request: Request) -> JsonReviewStore:
    return request.app.state.review_store


def get_review_service(request: Request) -> ReviewService:
    return ReviewService(get_review_store(request))


def get_product_service(request: Request) -> ProductService:
    client: ShopifyProductClient = request.app.state.shopify_client
    return ProductService(client)
