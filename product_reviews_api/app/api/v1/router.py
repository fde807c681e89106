"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import products, reviews

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
# The reviews router defines its own paths, including the product-scoped
# ``/products/{product_id}/reviews``.  Do not give it a prefix.
router.include_router(reviews.router, tags=["reviews"])
