"""
Session extraction for shop-scoped requests.

Authentication itself happens upstream of this service; what reaches
us is the shop domain and the Admin API access token for that shop.
The shop domain arrives in the ``X-Shopify-Shop-Domain`` header and the
token as ``Authorization: Bearer <token>`` (or, for compatibility with
Shopify's own convention, in ``X-Shopify-Access-Token``).

The dependency never rejects a request itself: an incomplete session
is passed on and refused by ``ProductService`` with ``Unauthorized``.
"""

from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..schemas.product import ShopSession

security = HTTPBearer(auto_error=False)


def get_shop_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    shop_domain: Optional[str] = Header(None, alias="X-Shopify-Shop-Domain"),
    shopify_access_token: Optional[str] = Header(None, alias="X-Shopify-Access-Token"),
) -> ShopSession:
    """Dependency that builds the ``ShopSession`` for the current request."""
    token = credentials.credentials if credentials is not None else shopify_access_token
    return ShopSession(shop=shop_domain, access_token=token)
