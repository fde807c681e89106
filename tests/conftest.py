import json
from pathlib import Path

import httpx
import pytest

from product_reviews_api.app.core.review_store import JsonReviewStore
from product_reviews_api.app.services.shopify_client import ShopifyProductClient


@pytest.fixture
def reviews_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "reviews.json"


@pytest.fixture
def store(reviews_path: Path) -> JsonReviewStore:
    return JsonReviewStore(reviews_path)


@pytest.fixture
def read_collection(reviews_path: Path):
    """Return the raw JSON array currently on disk."""

    def _read():
        return json.loads(reviews_path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def upstream():
    """Scripted upstream: set ``upstream.handler`` and inspect ``upstream.requests``."""

    class Upstream:
        def __init__(self):
            self.requests = []
            self.handler = lambda request: httpx.Response(
                200, json={"data": {"product": product_payload()}}
            )

        def __call__(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.handler(request)

        def client(self) -> ShopifyProductClient:
            http_client = httpx.AsyncClient(transport=httpx.MockTransport(self))
            return ShopifyProductClient(api_version="2024-10", timeout=5, http_client=http_client)

    return Upstream()


def product_payload(product_id: str = "123") -> dict:
    return {
        "id": f"gid://shopify/Product/{product_id}",
        "title": "Snowboard",
        "handle": "snowboard",
    }
