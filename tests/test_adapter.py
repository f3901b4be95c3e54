import base64

import pytest
import httpx

from shopify_product_creator import normalizer
from shopify_product_creator.adapter import (
    GraphQLProductCreator,
    RestProductCreator,
    build_client,
    create_product_creator,
    normalize_rest_product,
    to_global_id,
)
from shopify_product_creator.config import AppConfig
from shopify_product_creator.exceptions import UpstreamTransportError, UpstreamUserError
from shopify_product_creator.mock_client import MockShopifyClient
from shopify_product_creator.models.shopify_models import ShopifyRestProduct

from conftest import make_config


def transport_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://mystore.myshopify.com")


def test_to_global_id():
    assert to_global_id("Product", 42) == "gid://shopify/Product/42"
    assert to_global_id("Product", "gid://shopify/Product/42") == "gid://shopify/Product/42"


def test_factory_picks_creator_from_config(mock_client):
    assert isinstance(create_product_creator(make_config("graphql"), client=mock_client), GraphQLProductCreator)
    assert isinstance(create_product_creator(make_config("rest"), client=mock_client), RestProductCreator)


def test_sandbox_uses_mock_client():
    creator = create_product_creator(make_config(sandbox=True))
    assert isinstance(creator.client, MockShopifyClient)


def test_graphql_variables_default_inventory(mock_client):
    creator = GraphQLProductCreator(make_config(), client=mock_client)
    variables = creator.build_variables(normalizer.from_price("3"))
    variant = variables["input"]["variants"][0]
    assert variant == {"price": "3.00", "inventoryManagement": "SHOPIFY", "inventoryPolicy": "DENY"}
    assert variables["input"]["title"] == "Product - $3.00"


def test_rest_payload_default_inventory_and_image(mock_client):
    creator = RestProductCreator(make_config("rest"), client=mock_client)
    payload = creator.build_payload(normalizer.from_query("3", image="http://x/y.jpg"))
    product = payload["product"]
    assert product["variants"][0] == {"price": "3.00", "inventory_management": None, "inventory_policy": "continue"}
    assert product["images"] == [{"src": "http://x/y.jpg"}]
    assert product["body_html"] == "<p>Product created with price $3.00</p>"


def test_rest_payload_without_image(mock_client):
    creator = RestProductCreator(make_config("rest"), client=mock_client)
    payload = creator.build_payload(normalizer.from_query("3", image="  "))
    assert "images" not in payload["product"]


def test_inventory_override(mock_client):
    config = make_config("rest", inventory={"track_inventory": True, "inventory_policy": "deny"})
    creator = RestProductCreator(config, client=mock_client)
    variant = creator.build_payload(normalizer.from_price("3"))["product"]["variants"][0]
    assert variant["inventory_management"] == "shopify"
    assert variant["inventory_policy"] == "deny"


@pytest.mark.asyncio
async def test_graphql_create_normalizes_result(mock_client):
    creator = GraphQLProductCreator(make_config(), client=mock_client)
    product = await creator.create_product(normalizer.from_price("19.9"))
    assert product.id.startswith("gid://shopify/Product/")
    assert product.title == "Product - $19.90"
    assert product.variants.nodes[0].price == "19.90"
    assert product.images.nodes == []
    assert mock_client.requests[0]["endpoint"] == "/admin/api/2024-01/graphql.json"


@pytest.mark.asyncio
async def test_graphql_user_errors_raise_user_error():
    errors = [{"field": ["title"], "message": "Title can't be blank"}]
    creator = GraphQLProductCreator(make_config(), client=MockShopifyClient(user_errors=errors))
    with pytest.raises(UpstreamUserError) as exc:
        await creator.create_product(normalizer.from_price("1"))
    assert exc.value.status_code == 400
    assert exc.value.to_dict() == {"error": "Shopify API Error", "details": errors}


@pytest.mark.asyncio
async def test_graphql_top_level_errors_raise_transport_error():
    def handler(request):
        return httpx.Response(200, json={"errors": [{"message": "Access denied"}]})

    creator = GraphQLProductCreator(make_config(), client=transport_client(handler))
    with pytest.raises(UpstreamTransportError) as exc:
        await creator.create_product(normalizer.from_price("1"))
    assert exc.value.details == "Access denied"
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_rest_create_attaches_image(mock_client):
    creator = RestProductCreator(make_config("rest"), client=mock_client)
    product = await creator.create_product(normalizer.from_query("5", image="http://x/y.jpg"))
    assert len(product.images.nodes) == 1
    assert product.images.nodes[0].url == "http://x/y.jpg"
    assert product.images.nodes[0].id.startswith("gid://shopify/ProductImage/")
    assert product.variants.nodes[0].id.startswith("gid://shopify/ProductVariant/")
    assert mock_client.requests[0]["endpoint"] == "/admin/api/2024-01/products.json"


@pytest.mark.asyncio
async def test_rest_http_error_raises_transport_error():
    client = MockShopifyClient(status_code=422, error_body={"errors": {"title": ["can't be blank"]}})
    creator = RestProductCreator(make_config("rest"), client=client)
    with pytest.raises(UpstreamTransportError) as exc:
        await creator.create_product(normalizer.from_price("5"))
    assert "422" in exc.value.details
    assert isinstance(exc.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_network_error_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    creator = RestProductCreator(make_config("rest"), client=transport_client(handler))
    with pytest.raises(UpstreamTransportError) as exc:
        await creator.create_product(normalizer.from_price("5"))
    assert exc.value.details == "connection refused"


@pytest.mark.asyncio
async def test_requests_use_basic_auth_by_default():
    client = build_client(make_config("rest"))
    try:
        assert isinstance(client.auth, httpx.BasicAuth)
        request = client.build_request("POST", "/admin/api/2024-01/products.json", json={})
        signed = next(client.auth.auth_flow(request))
        expected = "Basic " + base64.b64encode(b"key:secret").decode()
        assert signed.headers["Authorization"] == expected
        assert str(signed.url) == "https://mystore.myshopify.com/admin/api/2024-01/products.json"
        assert client.timeout.read is None
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_timeout_is_applied_when_configured():
    config = AppConfig(shopify={"shop_name": "mystore", "timeout_seconds": 12.5})
    client = build_client(config)
    try:
        assert client.timeout.read == 12.5
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_access_token_replaces_basic_auth():
    config = AppConfig(shopify={"shop_name": "mystore", "access_token": "shpat_test"})
    client = build_client(config)
    try:
        assert client.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert client.auth is None
        assert client.base_url.host == "mystore.myshopify.com"
    finally:
        await client.aclose()


def test_normalize_rest_product_prefers_admin_graphql_id():
    product = ShopifyRestProduct(
        id=7,
        title="Mug",
        handle="mug",
        body_html="<p>Mug</p>",
        vendor="Acme",
        admin_graphql_api_id="gid://shopify/Product/7",
        variants=[{"id": 8, "title": "Default Title", "price": "4.50", "sku": "MUG"}],
    )
    result = normalize_rest_product(product).model_dump(by_alias=True)
    assert result["id"] == "gid://shopify/Product/7"
    assert result["descriptionHtml"] == "<p>Mug</p>"
    assert result["variants"]["nodes"][0] == {
        "id": "gid://shopify/ProductVariant/8",
        "title": "Default Title",
        "price": "4.50",
        "sku": "MUG",
    }
    assert result["images"] == {"nodes": []}


def creator_answering(creator_cls, body):
    def handler(request):
        return httpx.Response(200, json=body)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://mystore.myshopify.com")
    return creator_cls(make_config(creator_cls.api_style), client=client), client


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        ["x"],
        None,
        {"data": None},
        {"data": {"productCreate": "oops"}},
        {"data": {"productCreate": {"product": None, "userErrors": "bad"}}},
    ],
)
async def test_graphql_unexpected_body_is_transport_error(body):
    creator, client = creator_answering(GraphQLProductCreator, body)
    try:
        with pytest.raises(UpstreamTransportError) as exc:
            await creator.create_product(normalizer.from_price("10"))
    finally:
        await client.aclose()
    assert exc.value.status_code == 500
    assert exc.value.error == "Failed to create product"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [["x"], 42, {"product": "oops"}, {}])
async def test_rest_unexpected_body_is_transport_error(body):
    creator, client = creator_answering(RestProductCreator, body)
    try:
        with pytest.raises(UpstreamTransportError):
            await creator.create_product(normalizer.from_price("10"))
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_graphql_variables_omit_image():
    mock = MockShopifyClient()
    creator = GraphQLProductCreator(make_config(), client=mock)
    request = normalizer.from_query("5", title="Hat", image="http://x/y.jpg")
    result = await creator.create_product(request)
    assert "images" not in mock.requests[0]["json"]["variables"]["input"]
    assert result.images.nodes == []
