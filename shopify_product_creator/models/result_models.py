"""Pydantic models for the normalized product-creation response."""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class ResultImage(BaseModel):
    """Image attached to a created product."""
    id: Optional[str] = None
    url: str
    alt_text: Optional[str] = Field(None, alias="altText")

    model_config = ConfigDict(populate_by_name=True)


class ResultVariant(BaseModel):
    """Variant of a created product."""
    id: str
    title: Optional[str] = None
    price: Optional[str] = None
    sku: Optional[str] = None


class ImageNodes(BaseModel):
    nodes: List[ResultImage] = Field(default_factory=list)


class VariantNodes(BaseModel):
    nodes: List[ResultVariant] = Field(default_factory=list)


class ProductCreationResult(BaseModel):
    """A created product, identical in shape for GraphQL and REST upstreams."""
    id: str
    title: str
    handle: str
    description_html: Optional[str] = Field(None, alias="descriptionHtml")
    vendor: Optional[str] = None
    images: ImageNodes = Field(default_factory=ImageNodes)
    variants: VariantNodes = Field(default_factory=VariantNodes)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "gid://shopify/Product/123456",
                "title": "Product - $19.90",
                "handle": "product-19-90",
                "descriptionHtml": "<p>Product created with price $19.90</p>",
                "vendor": "",
                "images": {"nodes": []},
                "variants": {
                    "nodes": [
                        {
                            "id": "gid://shopify/ProductVariant/654321",
                            "title": "Default Title",
                            "price": "19.90",
                            "sku": ""
                        }
                    ]
                }
            }
        }
    )
