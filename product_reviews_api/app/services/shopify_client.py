"""
Client for the Shopify Admin GraphQL API.

Only one query is issued: fetch ``id``, ``title`` and ``handle`` of a
product by its numeric identifier.  Every outcome other than a product
is classified into one of the service errors:

* network failure or timeout -> ``UpstreamUnavailable``
* non-2xx response -> ``UpstreamRequestFailed`` (with the status code)
* 2xx response without a product -> ``ProductNotFound``

Each call makes exactly one attempt.  Retrying is left to callers
because the upstream request is not guaranteed to be safe to repeat.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.config import settings
from ..core.errors import ProductNotFound, UpstreamRequestFailed, UpstreamUnavailable
from ..schemas.product import Product

logger = logging.getLogger(__name__)

PRODUCT_QUERY = """
  query product($id: ID!) {
    product(id: $id) {
      id
      title
      handle
    }
  }
"""

# Upstream error bodies can be large HTML pages.
_MAX_LOGGED_BODY = 500


def product_gid(product_id: str) -> str:
    """Return the Shopify global identifier for a numeric product id."""
    return f"gid://shopify/Product/{product_id}"


class ShopifyProductClient:
    """Fetch products from a shop's Admin GraphQL endpoint.

    ``http_client`` may be supplied to reuse a connection pool or to
    inject a transport in tests; otherwise a client is opened for each
    call and closed afterwards.
    """

    def __init__(
        self,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_version = api_version or settings.shopify_api_version
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self._http_client = http_client

    def graphql_url(self, shop: str) -> str:
        return f"https://{shop}/admin/api/{self.api_version}/graphql.json"

    async def fetch_product(self, shop: str, access_token: str, product_id: str) -> Product:
        """Fetch a single product.

        Raises ``UpstreamUnavailable``, ``UpstreamRequestFailed`` or
        ``ProductNotFound`` as described in the module docstring.
        """
        url = self.graphql_url(shop)
        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        }
        payload = {"query": PRODUCT_QUERY, "variables": {"id": product_gid(product_id)}}

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, headers=headers, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)
        except httpx.TransportError as e:
            logger.error("Could not reach %s for product %s: %s", shop, product_id, e)
            raise UpstreamUnavailable() from e
        except httpx.RequestError as e:
            # Reached the shop but the response could not be read, e.g. a
            # broken content-encoding.
            logger.error("Unreadable response from %s for product %s: %s", shop, product_id, e)
            raise UpstreamUnavailable("Malformed upstream response") from e

        logger.info("Upstream responded %s for product %s on %s", response.status_code, product_id, shop)

        if not response.is_success:
            logger.error(
                "Upstream error response for product %s: %s", product_id, response.text[:_MAX_LOGGED_BODY]
            )
            raise UpstreamRequestFailed(response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Upstream returned a non-JSON body for product %s", product_id)
            raise UpstreamRequestFailed(response.status_code, "Malformed upstream response") from e

        return self._parse_product(body, product_id)

    @staticmethod
    def _parse_product(body: Any, product_id: str) -> Product:
        data = body.get("data") if isinstance(body, dict) else None
        product = data.get("product") if isinstance(data, dict) else None
        if isinstance(body, dict) and body.get("errors"):
            logger.warning("GraphQL errors for product %s: %s", product_id, body["errors"])
        if not isinstance(product, dict):
            raise ProductNotFound()
        try:
            return Product.model_validate(product)
        except PydanticValidationError as e:
            logger.warning("Incomplete product payload for %s: %s", product_id, e.errors())
            raise ProductNotFound() from e
