"""Configuration management for the Shopify Product Creator."""

import os
from typing import Optional, Literal, List
from pydantic import BaseModel, Field, ConfigDict, field_validator
from dotenv import load_dotenv


ApiStyle = Literal["graphql", "rest"]


class ShopifyConfig(BaseModel):
    """Shopify Admin API configuration."""
    shop_name: str = Field(..., description="Shop name ('mystore') or domain ('mystore.myshopify.com')")
    api_key: str = Field("", description="Private app API key")
    password: str = Field("", description="Private app password / API secret")
    access_token: Optional[str] = Field(None, description="Admin API access token (overrides basic auth)")
    api_version: str = Field("2024-01", description="Shopify API version")
    api_style: ApiStyle = Field("graphql", description="Upstream variant: 'graphql' mutation or 'rest' resource")
    timeout_seconds: Optional[float] = Field(
        None,
        gt=0,
        description="Upstream request timeout; None waits indefinitely"
    )

    @field_validator("shop_name")
    @classmethod
    def strip_shop_name(cls, v: str) -> str:
        v = v.strip()
        for prefix in ("https://", "http://"):
            if v.startswith(prefix):
                v = v[len(prefix):]
        return v.rstrip("/")

    @property
    def shop_domain(self) -> str:
        if not self.shop_name or "." in self.shop_name:
            return self.shop_name
        return f"{self.shop_name}.myshopify.com"


class InventoryConfig(BaseModel):
    """
    Inventory behaviour for created variants.

    None keeps the default of the active api style: GraphQL tracks inventory
    and denies overselling, REST disables tracking and allows overselling.
    """
    track_inventory: Optional[bool] = Field(None, description="Let Shopify track inventory for the variant")
    inventory_policy: Optional[Literal["deny", "continue"]] = Field(
        None,
        description="Whether customers may buy when out of stock"
    )


class CorsConfig(BaseModel):
    """CORS configuration."""
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = True


class AppConfig(BaseModel):
    """Main configuration for the Shopify Product Creator."""
    shopify: ShopifyConfig
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    sandbox: bool = Field(False, description="Answer upstream calls with the mock client")
    log_level: str = Field("INFO", description="Root log level for the service")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "shopify": {
                    "shop_name": "mystore",
                    "api_key": "your_api_key",
                    "password": "shppa_xxxxx",
                    "api_version": "2024-01",
                    "api_style": "graphql"
                },
                "inventory": {
                    "track_inventory": None,
                    "inventory_policy": None
                },
                "sandbox": False,
                "log_level": "INFO"
            }
        }
    )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AppConfig":
        """
        Build configuration from environment variables.

        A .env file is loaded first when present; variables already set in
        the process environment win.
        """
        load_dotenv(env_file)
        timeout = os.getenv("SHOPIFY_TIMEOUT_SECONDS")
        shopify = {
            "shop_name": os.getenv("SHOPIFY_SHOP_NAME", ""),
            "api_key": os.getenv("SHOPIFY_API_KEY", ""),
            "password": os.getenv("SHOPIFY_PASSWORD", ""),
            "access_token": os.getenv("SHOPIFY_ACCESS_TOKEN") or None,
            "api_version": os.getenv("SHOPIFY_API_VERSION", "2024-01"),
            "api_style": os.getenv("SHOPIFY_API_STYLE", "graphql").lower(),
            "timeout_seconds": float(timeout) if timeout else None,
        }
        sandbox = os.getenv("PRODUCT_CREATOR_SANDBOX", "false").lower() in ("1", "true", "yes")
        return cls(
            shopify=shopify,
            sandbox=sandbox,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
