import asyncio
import json

import httpx
import pytest

from product_reviews_api.app.core.errors import ProductNotFound, UpstreamRequestFailed, UpstreamUnavailable
from product_reviews_api.app.core.config import settings
from product_reviews_api.app.services.shopify_client import PRODUCT_QUERY, ShopifyProductClient, product_gid

SHOP = "demo-store.myshopify.com"
TOKEN = "shpat_test_token"


def fetch(upstream, product_id="123"):
    return asyncio.run(upstream.client().fetch_product(SHOP, TOKEN, product_id))


def test_returns_normalized_product(upstream):
    product = fetch(upstream)

    assert product.id == "gid://shopify/Product/123"
    assert product.title == "Snowboard"
    assert product.handle == "snowboard"


def test_sends_authenticated_graphql_post(upstream):
    fetch(upstream, "987")

    [request] = upstream.requests
    assert request.method == "POST"
    assert str(request.url) == "https://demo-store.myshopify.com/admin/api/2024-10/graphql.json"
    assert request.headers["X-Shopify-Access-Token"] == TOKEN
    assert request.headers["Content-Type"] == "application/json"
    body = json.loads(request.content)
    assert body["query"] == PRODUCT_QUERY
    assert body["variables"] == {"id": "gid://shopify/Product/987"}


def test_product_gid():
    assert product_gid("42") == "gid://shopify/Product/42"


def test_null_product_is_not_found(upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"data": {"product": None}})
    with pytest.raises(ProductNotFound):
        fetch(upstream)


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"data": None},
        {"errors": [{"message": "Invalid id"}]},
        {"data": {"product": {"id": "gid://shopify/Product/1"}}},
        [],
    ],
)
def test_missing_product_payload_is_not_found(upstream, body):
    upstream.handler = lambda request: httpx.Response(200, json=body)
    with pytest.raises(ProductNotFound):
        fetch(upstream)


@pytest.mark.parametrize("status", [401, 403, 404, 429, 500, 503])
def test_non_success_status_carries_status_code(upstream, status):
    upstream.handler = lambda request: httpx.Response(status, text="nope")
    with pytest.raises(UpstreamRequestFailed) as exc:
        fetch(upstream)
    assert exc.value.upstream_status == status
    assert exc.value.status_code == 502


def test_non_json_success_body_is_a_failed_request(upstream):
    upstream.handler = lambda request: httpx.Response(200, text="<html>maintenance</html>")
    with pytest.raises(UpstreamRequestFailed) as exc:
        fetch(upstream)
    assert exc.value.upstream_status == 200


def test_connection_failure_is_unavailable(upstream):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream.handler = refuse
    with pytest.raises(UpstreamUnavailable):
        fetch(upstream)


def test_timeout_is_unavailable(upstream):
    def too_slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.handler = too_slow
    with pytest.raises(UpstreamUnavailable):
        fetch(upstream)


def test_single_attempt_per_call(upstream):
    upstream.handler = lambda request: httpx.Response(503)
    with pytest.raises(UpstreamRequestFailed):
        fetch(upstream)
    assert len(upstream.requests) == 1


def test_unreadable_response_is_unavailable(upstream):
    def broken_encoding(request):
        raise httpx.DecodingError("invalid gzip stream", request=request)

    upstream.handler = broken_encoding
    with pytest.raises(UpstreamUnavailable) as exc:
        fetch(upstream)
    assert exc.value.message == "Malformed upstream response"


def test_configured_timeout_reaches_the_request(upstream):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    client = ShopifyProductClient(timeout=2.5, http_client=http_client)

    asyncio.run(client.fetch_product(SHOP, TOKEN, "123"))

    assert upstream.requests[0].extensions["timeout"] == {
        "connect": 2.5,
        "read": 2.5,
        "write": 2.5,
        "pool": 2.5,
    }


def test_default_timeout_comes_from_settings():
    assert ShopifyProductClient().timeout == settings.upstream_timeout_seconds
