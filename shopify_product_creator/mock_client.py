"""Mock Shopify client for sandbox mode."""

import itertools
import re
from typing import Any, Dict, List, Optional
import httpx


def _handleize(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-") or "product"


class MockShopifyClient:
    """
    Mock Shopify client that answers productCreate calls with echo data.

    Every request is kept in ``requests`` so callers can assert on what would
    have been sent upstream.

    Args:
        user_errors: userErrors returned by GraphQL calls
        status_code: HTTP status for every response
        error_body: Body returned when status_code is an error
    """

    def __init__(
        self,
        user_errors: Optional[List[Dict[str, Any]]] = None,
        status_code: int = 200,
        error_body: Optional[Dict[str, Any]] = None,
    ):
        self.user_errors = user_errors or []
        self.status_code = status_code
        self.error_body = error_body or {"errors": "Mock HTTP error"}
        self.requests: List[Dict[str, Any]] = []
        self._ids = itertools.count(1000)

    async def request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        payload = kwargs.get("json") or {}
        self.requests.append({"method": method, "endpoint": endpoint, "json": payload})
        request = httpx.Request(method, f"https://mock.myshopify.com{endpoint}")

        if self.status_code >= 400:
            return httpx.Response(self.status_code, json=self.error_body, request=request)
        if endpoint.endswith("/graphql.json"):
            data = self._graphql_response(payload)
        elif endpoint.endswith("/products.json"):
            data = self._rest_response(payload)
        else:
            return httpx.Response(404, json={"errors": "Not Found"}, request=request)
        return httpx.Response(self.status_code, json=data, request=request)

    def _graphql_response(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.user_errors:
            return {"data": {"productCreate": {"product": None, "userErrors": self.user_errors}}}

        product_input = payload.get("variables", {}).get("input", {})
        variant = (product_input.get("variants") or [{}])[0]
        product_id = next(self._ids)
        return {
            "data": {
                "productCreate": {
                    "product": {
                        "id": f"gid://shopify/Product/{product_id}",
                        "title": product_input.get("title", ""),
                        "handle": _handleize(product_input.get("title", "")),
                        "descriptionHtml": product_input.get("descriptionHtml", ""),
                        "vendor": product_input.get("vendor", ""),
                        "images": {"nodes": []},
                        "variants": {
                            "nodes": [
                                {
                                    "id": f"gid://shopify/ProductVariant/{next(self._ids)}",
                                    "title": "Default Title",
                                    "price": variant.get("price"),
                                    "sku": "",
                                }
                            ]
                        },
                    },
                    "userErrors": [],
                }
            }
        }

    def _rest_response(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        product = payload.get("product", {})
        variant = (product.get("variants") or [{}])[0]
        product_id = next(self._ids)
        return {
            "product": {
                "id": product_id,
                "title": product.get("title", ""),
                "handle": _handleize(product.get("title", "")),
                "body_html": product.get("body_html", ""),
                "vendor": product.get("vendor", ""),
                "images": [
                    {"id": next(self._ids), "src": image["src"], "alt": None}
                    for image in product.get("images", [])
                ],
                "variants": [
                    {
                        "id": next(self._ids),
                        "title": "Default Title",
                        "price": variant.get("price"),
                        "sku": "",
                    }
                ],
            }
        }

    async def aclose(self) -> None:
        return None
