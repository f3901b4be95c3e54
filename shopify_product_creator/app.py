"""FastAPI application wiring: CORS, error handling and the product router."""

from contextlib import asynccontextmanager
from typing import Optional
import logging
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.sdk.metrics import MeterProvider

from .adapter import UpstreamProductCreator, create_product_creator
from .config import AppConfig
from .exceptions import InvalidRequestBody, ProductCreatorError
from .router import get_product_router
from .telemetry import UpstreamMetrics

logger = logging.getLogger("shopify_product_creator")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the service."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def handle_product_creator_error(request: Request, exc: ProductCreatorError) -> JSONResponse:
    """Render a ProductCreatorError as ``{error, details}``."""
    if exc.status_code >= 500:
        logger.error(
            "Upstream failure on %s: %s",
            request.url.path,
            exc.details,
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.error)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render framework-level request validation failures as a 400 ``{error, details}``."""
    error = InvalidRequestBody(jsonable_encoder(exc.errors()))
    return await handle_product_creator_error(request, error)


def create_app(
    config: Optional[AppConfig] = None,
    creator: Optional[UpstreamProductCreator] = None,
    meter_provider: Optional[MeterProvider] = None,
) -> FastAPI:
    """
    Create the product creator FastAPI app.

    Args:
        config: Application configuration (read from the environment if None)
        creator: Optional pre-built upstream creator, e.g. with a mock client
        meter_provider: Optional metrics provider (console exporter if None)

    Returns:
        FastAPI app ready to run
    """
    if config is None:
        config = creator.config if creator is not None else AppConfig.from_env()
    if creator is None:
        creator = create_product_creator(config)
    metrics = UpstreamMetrics(meter_provider)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info(
            "Shopify Product Creator started for %s (%s)",
            config.shopify.shop_domain or "unconfigured shop",
            creator.api_style,
        )
        yield
        await creator.close()
        metrics.shutdown()

    app = FastAPI(title="Shopify Product Creator", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
    )
    app.add_exception_handler(ProductCreatorError, handle_product_creator_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    @app.options("/{path:path}")
    async def preflight(path: str):
        """Answer any OPTIONS request with a bare 200."""
        return Response(status_code=200)

    app.include_router(get_product_router(creator, metrics))
    app.state.creator = creator
    return app
