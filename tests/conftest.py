import pytest
import httpx
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from shopify_product_creator.adapter import create_product_creator
from shopify_product_creator.app import create_app
from shopify_product_creator.config import AppConfig
from shopify_product_creator.mock_client import MockShopifyClient


def make_config(api_style: str = "graphql", **overrides) -> AppConfig:
    return AppConfig(
        shopify={
            "shop_name": "mystore",
            "api_key": "key",
            "password": "secret",
            "api_version": "2024-01",
            "api_style": api_style,
        },
        **overrides,
    )


@pytest.fixture
def mock_client():
    return MockShopifyClient()


@pytest.fixture
def metric_reader():
    return InMemoryMetricReader()


@pytest.fixture
def meter_provider(metric_reader):
    provider = MeterProvider(metric_readers=[metric_reader], shutdown_on_exit=False)
    yield provider
    provider.shutdown()


@pytest.fixture
def make_http_client(meter_provider):
    """Build an ASGI-backed httpx client for an app using the given creator settings."""

    def _make(api_style: str = "graphql", client=None):
        config = make_config(api_style)
        creator = create_product_creator(config, client=client or MockShopifyClient())
        app = create_app(config, creator=creator, meter_provider=meter_provider)
        transport = httpx.ASGITransport(app=app)
        return httpx.AsyncClient(transport=transport, base_url="http://test"), creator

    return _make
