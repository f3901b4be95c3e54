"""Upstream adapters that create products through the Shopify Admin API."""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Union
import logging
import httpx
from pydantic import ValidationError

from .config import AppConfig, InventoryConfig
from .exceptions import UpstreamTransportError, UpstreamUserError
from .mock_client import MockShopifyClient
from .normalizer import ProductCreationRequest
from .models.shopify_models import (
    ShopifyGraphQLProduct,
    ShopifyProductCreatePayload,
    ShopifyRestProduct,
)
from .models.result_models import (
    ProductCreationResult,
    ResultImage,
    ResultVariant,
    ImageNodes,
    VariantNodes,
)

logger = logging.getLogger(__name__)


PRODUCT_CREATE_MUTATION = """mutation productCreate($input: ProductInput!) {
  productCreate(input: $input) {
    product {
      id
      title
      handle
      descriptionHtml
      vendor
      images(first: 10) {
        nodes {
          id
          url
          altText
        }
      }
      variants(first: 1) {
        nodes {
          id
          title
          price
          sku
        }
      }
    }
    userErrors {
      field
      message
    }
  }
}"""


def to_global_id(resource: str, value: Union[int, str]) -> str:
    """Return a ``gid://shopify/<resource>/<id>`` string, passing gids through."""
    text = str(value)
    if text.startswith("gid://"):
        return text
    return f"gid://shopify/{resource}/{text}"


def normalize_graphql_product(product: ShopifyGraphQLProduct) -> ProductCreationResult:
    """Convert a productCreate mutation product into the shared result shape."""
    return ProductCreationResult(
        id=to_global_id("Product", product.id),
        title=product.title,
        handle=product.handle,
        description_html=product.description_html,
        vendor=product.vendor,
        images=ImageNodes(nodes=[
            ResultImage(
                id=to_global_id("ProductImage", img.id) if img.id else None,
                url=img.url,
                alt_text=img.alt_text
            )
            for img in product.images.nodes
        ]),
        variants=VariantNodes(nodes=[
            ResultVariant(
                id=to_global_id("ProductVariant", v.id),
                title=v.title,
                price=v.price,
                sku=v.sku
            )
            for v in product.variants.nodes
        ]),
    )


def normalize_rest_product(product: ShopifyRestProduct) -> ProductCreationResult:
    """Convert a REST product record into the shared result shape."""
    return ProductCreationResult(
        id=product.admin_graphql_api_id or to_global_id("Product", product.id),
        title=product.title,
        handle=product.handle,
        description_html=product.body_html,
        vendor=product.vendor,
        images=ImageNodes(nodes=[
            ResultImage(
                id=to_global_id("ProductImage", img.id) if img.id is not None else None,
                url=img.src,
                alt_text=img.alt
            )
            for img in product.images
        ]),
        variants=VariantNodes(nodes=[
            ResultVariant(
                id=v.admin_graphql_api_id or to_global_id("ProductVariant", v.id),
                title=v.title,
                price=v.price,
                sku=v.sku
            )
            for v in product.variants
        ]),
    )


def build_client(config: AppConfig) -> httpx.AsyncClient:
    """Create the HTTP client used to talk to the shop's Admin API."""
    shopify = config.shopify
    headers = {"Content-Type": "application/json"}
    auth = None
    if shopify.access_token:
        headers["X-Shopify-Access-Token"] = shopify.access_token
    else:
        auth = httpx.BasicAuth(shopify.api_key, shopify.password)
    return httpx.AsyncClient(
        base_url=f"https://{shopify.shop_domain}",
        headers=headers,
        auth=auth,
        timeout=shopify.timeout_seconds
    )


class UpstreamProductCreator(ABC):
    """
    Creates one product upstream and returns it in the normalized shape.

    Callers never learn which Shopify API produced the result. Concrete
    creators are picked once, from configuration, by ``create_product_creator``.
    """

    api_style: str = ""

    def __init__(self, config: AppConfig, client: Optional[Any] = None):
        """
        Initialize the creator.

        Args:
            config: Application configuration
            client: Optional HTTP client (e.g., MockShopifyClient)
        """
        self.config = config
        if client is not None:
            self.client = client
            self._owns_client = False
        else:
            self.client = build_client(config)
            self._owns_client = True

    async def close(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _endpoint(self, resource: str) -> str:
        return f"/admin/api/{self.config.shopify.api_version}/{resource}"

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON payload and return the decoded body, mapping failures."""
        try:
            response = await self.client.request("POST", endpoint, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Shopify returned HTTP %s for %s", e.response.status_code, endpoint)
            raise UpstreamTransportError(
                f"Shopify responded with {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            logger.error("Request to Shopify failed: %r", e)
            raise UpstreamTransportError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise UpstreamTransportError(f"Invalid JSON from Shopify: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamTransportError(f"Expected a JSON object from Shopify, got {type(data).__name__}")
        return data

    @abstractmethod
    async def create_product(self, request: ProductCreationRequest) -> ProductCreationResult:
        """
        Create a product upstream.

        Raises:
            UpstreamUserError: Shopify rejected fields of the product
            UpstreamTransportError: Anything else went wrong
        """


class GraphQLProductCreator(UpstreamProductCreator):
    """Creates products with the ``productCreate`` GraphQL mutation."""

    api_style = "graphql"

    def build_variables(self, request: ProductCreationRequest) -> Dict[str, Any]:
        inventory: InventoryConfig = self.config.inventory
        track = True if inventory.track_inventory is None else inventory.track_inventory
        policy = inventory.inventory_policy or "deny"
        return {
            "input": {
                "title": request.title,
                "descriptionHtml": request.description_html,
                "vendor": request.vendor,
                "variants": [
                    {
                        "price": request.price,
                        "inventoryManagement": "SHOPIFY" if track else "NOT_MANAGED",
                        "inventoryPolicy": policy.upper(),
                    }
                ],
            }
        }

    async def create_product(self, request: ProductCreationRequest) -> ProductCreationResult:
        if request.image_url:
            logger.debug("Ignoring image %s, not supported by the GraphQL creator", request.image_url)

        data = await self._post(
            self._endpoint("graphql.json"),
            {"query": PRODUCT_CREATE_MUTATION, "variables": self.build_variables(request)},
        )

        errors = data.get("errors")
        if errors:
            if isinstance(errors, list):
                message = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            else:
                message = str(errors)
            raise UpstreamTransportError(message)

        body = data.get("data") or {}
        payload = body.get("productCreate") if isinstance(body, dict) else None
        if not isinstance(payload, dict):
            raise UpstreamTransportError("Shopify response did not include productCreate")

        user_errors = payload.get("userErrors") or []
        if not isinstance(user_errors, list):
            raise UpstreamTransportError(f"Unexpected userErrors in productCreate: {user_errors!r}")
        if user_errors:
            logger.warning("productCreate reported user errors: %s", user_errors)
            raise UpstreamUserError(user_errors)

        try:
            parsed = ShopifyProductCreatePayload(**payload)
        except ValidationError as e:
            raise UpstreamTransportError(f"Unexpected productCreate payload: {e}") from e
        if parsed.product is None:
            raise UpstreamTransportError("Shopify did not return the created product")
        return normalize_graphql_product(parsed.product)


class RestProductCreator(UpstreamProductCreator):
    """Creates products through the REST ``products.json`` resource."""

    api_style = "rest"

    def build_payload(self, request: ProductCreationRequest) -> Dict[str, Any]:
        inventory: InventoryConfig = self.config.inventory
        track = False if inventory.track_inventory is None else inventory.track_inventory
        policy = inventory.inventory_policy or "continue"
        product: Dict[str, Any] = {
            "title": request.title,
            "body_html": request.description_html,
            "vendor": request.vendor,
            "variants": [
                {
                    "price": request.price,
                    "inventory_management": "shopify" if track else None,
                    "inventory_policy": policy,
                }
            ],
        }
        if request.image_url.strip():
            product["images"] = [{"src": request.image_url.strip()}]
        return {"product": product}

    async def create_product(self, request: ProductCreationRequest) -> ProductCreationResult:
        data = await self._post(self._endpoint("products.json"), self.build_payload(request))
        try:
            product = ShopifyRestProduct(**data["product"])
        except (KeyError, TypeError, ValidationError) as e:
            raise UpstreamTransportError(f"Unexpected products.json payload: {e}") from e
        return normalize_rest_product(product)


CREATORS = {
    GraphQLProductCreator.api_style: GraphQLProductCreator,
    RestProductCreator.api_style: RestProductCreator,
}


def create_product_creator(config: AppConfig, client: Optional[Any] = None) -> UpstreamProductCreator:
    """
    Build the creator for the configured api style.

    In sandbox mode, without an explicit client, requests go to a
    MockShopifyClient instead of the shop.
    """
    if client is None and config.sandbox:
        client = MockShopifyClient()
    creator_cls = CREATORS[config.shopify.api_style]
    logger.info("Using %s product creator for %s", creator_cls.api_style, config.shopify.shop_domain)
    return creator_cls(config, client=client)
