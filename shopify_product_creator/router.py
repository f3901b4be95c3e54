"""FastAPI router for product creation endpoints."""

from typing import Any, Optional
from time import perf_counter
import json
import logging
from fastapi import APIRouter, Request
from pydantic import BaseModel, Field, ConfigDict, ValidationError

from . import normalizer
from .adapter import UpstreamProductCreator
from .exceptions import InvalidRequestBody
from .normalizer import ProductCreationRequest
from .telemetry import UpstreamMetrics

logger = logging.getLogger(__name__)


class ProductCreatePayload(BaseModel):
    """Body of ``POST /create-product``. Validation happens in the normalizer."""
    price: Optional[Any] = None
    title: Optional[Any] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = ConfigDict(populate_by_name=True)


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> ProductCreatePayload:
    """
    Read the create body as JSON or form data.

    An empty body yields an empty payload, so the normalizer reports the
    missing price.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data: Any = dict(form)
    else:
        raw = await request.body()
        if not raw.strip():
            data = {}
        else:
            try:
                data = json.loads(raw)
            except ValueError as e:
                raise InvalidRequestBody(f"Malformed JSON: {e}")

    if not isinstance(data, dict):
        raise InvalidRequestBody("Expected a JSON object")
    try:
        return ProductCreatePayload.model_validate(data)
    except ValidationError as e:
        raise InvalidRequestBody(e.errors(include_url=False, include_context=False, include_input=False))


def get_product_router(
    creator: UpstreamProductCreator,
    metrics: Optional[UpstreamMetrics] = None,
) -> APIRouter:
    """
    Create a FastAPI router for product creation.

    Args:
        creator: Upstream product creator used for every request
        metrics: Upstream call metrics (a console-exporting one if None)

    Returns:
        APIRouter with async endpoints
    """
    router = APIRouter(tags=["products"])
    metrics = metrics or UpstreamMetrics()

    async def create(request: ProductCreationRequest) -> dict:
        start = perf_counter()
        try:
            product = await creator.create_product(request)
        finally:
            duration_ms = (perf_counter() - start) * 1000
            metrics.record_upstream_call(duration_ms, creator.api_style)

        logger.info(
            "product_created",
            extra={"product_id": product.id, "api_style": creator.api_style, "duration_ms": duration_ms},
        )
        return {
            "success": True,
            "product": product.model_dump(mode="json", by_alias=True),
            "message": normalizer.success_message(request),
        }

    @router.get("/")
    async def index():
        """Service metadata and endpoint listing."""
        return {
            "message": "Shopify Product Creator API is running",
            "apiStyle": creator.api_style,
            "endpoints": {
                "createProduct": "/create-product/:price",
                "createProductWithDetails": "/create-product/:price/:title",
                "createProductFull": "/create-product-full/:price?title=&image=&description=&vendor=",
                "createProductPost": "POST /create-product",
            },
        }

    @router.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "apiStyle": creator.api_style}

    @router.get("/create-product/{price}")
    async def create_with_price(price: str):
        """Create a product with an auto-generated title."""
        return await create(normalizer.from_price(price))

    @router.get("/create-product/{price}/{title}")
    async def create_with_price_and_title(price: str, title: str):
        """Create a product with a custom, URL-encoded title."""
        return await create(normalizer.from_price_and_title(price, title))

    @router.get("/create-product-full/{price}")
    async def create_full(
        price: str,
        title: Optional[str] = None,
        image: Optional[str] = None,
        description: Optional[str] = None,
        vendor: Optional[str] = None,
    ):
        """Create a product with every field taken from the query string."""
        return await create(normalizer.from_query(price, title, image, description, vendor))

    @router.post("/create-product")
    async def create_from_body(request: Request):
        """Create a product from a JSON or form body; title is required."""
        payload = await read_payload(request)
        return await create(normalizer.from_body(
            payload.price,
            payload.title,
            description=payload.description,
            vendor=payload.vendor,
            image_url=payload.image_url,
        ))

    return router
