"""Data models for Shopify responses and the normalized result."""

from .shopify_models import (
    ShopifyUserError,
    ShopifyImageNode,
    ShopifyVariantNode,
    ShopifyGraphQLProduct,
    ShopifyProductCreatePayload,
    ShopifyRestImage,
    ShopifyRestVariant,
    ShopifyRestProduct,
)
from .result_models import (
    ProductCreationResult,
    ResultImage,
    ResultVariant,
    ImageNodes,
    VariantNodes,
)

__all__ = [
    "ShopifyUserError",
    "ShopifyImageNode",
    "ShopifyVariantNode",
    "ShopifyGraphQLProduct",
    "ShopifyProductCreatePayload",
    "ShopifyRestImage",
    "ShopifyRestVariant",
    "ShopifyRestProduct",
    "ProductCreationResult",
    "ResultImage",
    "ResultVariant",
    "ImageNodes",
    "VariantNodes",
]
