"""Pydantic models for Shopify productCreate responses."""

from typing import Optional, List, Union
from pydantic import BaseModel, Field, ConfigDict


class ShopifyUserError(BaseModel):
    """Field-level error reported by a GraphQL mutation."""
    field: Optional[List[str]] = None
    message: str


class ShopifyImageNode(BaseModel):
    """GraphQL image node."""
    id: Optional[str] = None
    url: str
    alt_text: Optional[str] = Field(None, alias="altText")

    model_config = ConfigDict(populate_by_name=True)


class ShopifyVariantNode(BaseModel):
    """GraphQL product variant node."""
    id: str
    title: Optional[str] = None
    price: Optional[str] = None
    sku: Optional[str] = None


class ShopifyImageConnection(BaseModel):
    nodes: List[ShopifyImageNode] = Field(default_factory=list)


class ShopifyVariantConnection(BaseModel):
    nodes: List[ShopifyVariantNode] = Field(default_factory=list)


class ShopifyGraphQLProduct(BaseModel):
    """Product as returned by the productCreate mutation."""
    id: str
    title: str
    handle: str
    description_html: Optional[str] = Field(None, alias="descriptionHtml")
    vendor: Optional[str] = None
    images: ShopifyImageConnection = Field(default_factory=ShopifyImageConnection)
    variants: ShopifyVariantConnection = Field(default_factory=ShopifyVariantConnection)

    model_config = ConfigDict(populate_by_name=True)


class ShopifyProductCreatePayload(BaseModel):
    """The ``productCreate`` field of a mutation response."""
    product: Optional[ShopifyGraphQLProduct] = None
    user_errors: List[ShopifyUserError] = Field(default_factory=list, alias="userErrors")

    model_config = ConfigDict(populate_by_name=True)


class ShopifyRestImage(BaseModel):
    """Image record of the REST products resource."""
    id: Optional[Union[int, str]] = None
    src: str
    alt: Optional[str] = None


class ShopifyRestVariant(BaseModel):
    """Variant record of the REST products resource."""
    id: Union[int, str]
    title: Optional[str] = None
    price: Optional[str] = None
    sku: Optional[str] = None
    admin_graphql_api_id: Optional[str] = None


class ShopifyRestProduct(BaseModel):
    """Product record of the REST products resource."""
    id: Union[int, str]
    title: str
    handle: str
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    admin_graphql_api_id: Optional[str] = None
    images: List[ShopifyRestImage] = Field(default_factory=list)
    variants: List[ShopifyRestVariant] = Field(default_factory=list)
