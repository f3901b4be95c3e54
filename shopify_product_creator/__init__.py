"""
Shopify Product Creator

A small HTTP façade that validates product-creation requests and forwards
them to the Shopify Admin API (GraphQL or REST), returning one normalized
JSON shape whichever API is used.
"""

__version__ = "0.1.0"

from .adapter import (
    UpstreamProductCreator,
    GraphQLProductCreator,
    RestProductCreator,
    create_product_creator,
)
from .app import create_app
from .config import AppConfig
from .mock_client import MockShopifyClient
from .router import get_product_router

__all__ = [
    "UpstreamProductCreator",
    "GraphQLProductCreator",
    "RestProductCreator",
    "create_product_creator",
    "create_app",
    "AppConfig",
    "MockShopifyClient",
    "get_product_router",
]
