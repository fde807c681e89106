"""
Business logic for product lookup.

The lookup checks the shop session, checks the product identifier and
then asks the commerce platform for the product.  Errors raised by the
upstream client are passed through unchanged.
"""

import logging
import re
from typing import Optional

from ..core.config import settings
from ..core.errors import BadRequest, Unauthorized
from ..schemas.product import Product, ShopSession
from .shopify_client import ShopifyProductClient


class ProductService:
    """Service for resolving product identifiers into products."""

    def __init__(self, client: ShopifyProductClient, shop_domain_pattern: Optional[str] = None) -> None:
        self._client = client
        self._shop_pattern = re.compile(shop_domain_pattern or settings.shop_domain_pattern)

    async def lookup_product(self, session: Optional[ShopSession], product_id: Optional[str]) -> Product:
        """Fetch the product ``product_id`` from the session's shop.

        Raises ``Unauthorized`` when the session is missing, incomplete
        or names a shop outside the accepted domain pattern, and
        ``BadRequest`` when ``product_id`` is empty.
        """
        logger = logging.getLogger(__name__)
        if session is None:
            raise Unauthorized()
        if not session.shop or not session.access_token:
            raise Unauthorized("Invalid session")
        shop = session.shop.strip().lower()
        if not self._shop_pattern.fullmatch(shop):
            logger.warning("Rejected session for unexpected shop domain %r", session.shop)
            raise Unauthorized("Invalid session")
        if not product_id or not product_id.strip():
            raise BadRequest("Product ID is required")

        logger.info("Looking up product %s on %s", product_id, shop)
        return await self._client.fetch_product(shop, session.access_token, product_id.strip())
