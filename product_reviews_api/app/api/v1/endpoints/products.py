"""
API endpoint for product lookup.

Resolves a product identifier against the shop's catalogue on the
commerce platform.  The shop and access token come from the request
session (see ``core.security``).  Failures are raised as service
errors and rendered by the application's error handler: 401 for a bad
session, 400 for a missing id, 404 when the product does not exist and
502 when the platform is unreachable or refuses the request.
"""

from fastapi import APIRouter, Depends

from ....core.security import get_shop_session
from ....schemas.product import ProductResponse, ShopSession
from ....schemas.error import ErrorResponse
from ....services.product_service import ProductService
from ...deps import get_product_service

router = APIRouter()


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product details",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def get_product(
    product_id: str,
    session: ShopSession = Depends(get_shop_session),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Return ``{"product": {id, title, handle}}`` for ``product_id``."""
    product = await service.lookup_product(session, product_id)
    return ProductResponse(product=product)
