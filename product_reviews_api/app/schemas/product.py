"""
Pydantic schemas for products fetched from the commerce platform.

Products are snapshots returned by the upstream API.  They are not
stored or cached; they live only for the duration of a lookup.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Normalized product record."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Upstream global identifier, e.g. gid://shopify/Product/123")
    title: str
    handle: str = Field(..., description="URL-safe slug")


class ProductResponse(BaseModel):
    """Response body of the product lookup endpoint."""

    product: Product


class ShopSession(BaseModel):
    """Credentials supplied by the authentication layer.

    Either part may be missing; the lookup service decides whether the
    session is usable.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    shop: Optional[str] = None
    access_token: Optional[str] = Field(None, alias="accessToken", repr=False)
