"""Validation and defaulting of inbound product-creation requests."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional
from urllib.parse import unquote
from pydantic import BaseModel

from .exceptions import InvalidPrice, MissingTitle


GET_PRICE_ERROR = "Invalid price. Price must be a positive number."
POST_PRICE_ERROR = "Invalid or missing price. Price must be a positive number."

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_CENTS = Decimal("0.01")


class ProductCreationRequest(BaseModel):
    """A validated product-creation request, ready for the upstream call."""
    title: str
    price: str
    description_html: str
    vendor: str = ""
    image_url: str = ""
    custom_title: bool = True


def parse_price(value: Any, error: str = GET_PRICE_ERROR) -> Decimal:
    """
    Parse a raw price into a positive Decimal.

    Accepts strings and numbers. Booleans, blanks, malformed numbers,
    non-finite values and anything <= 0 raise InvalidPrice.
    """
    if value is None or isinstance(value, bool):
        raise InvalidPrice(error)
    text = str(value).strip()
    if not _NUMBER_RE.match(text):
        raise InvalidPrice(error)
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidPrice(error)
    if not amount.is_finite() or amount <= 0:
        raise InvalidPrice(error)
    return amount


def format_price(value: Any, error: str = GET_PRICE_ERROR) -> str:
    """Format a price to exactly two decimal places, rounding half up."""
    amount = value if isinstance(value, Decimal) else parse_price(value, error)
    try:
        return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # too many digits for the decimal context
        raise InvalidPrice(error)


def decode_title(title: str) -> str:
    """Percent-decode a title taken from a URL path segment or query string."""
    return unquote(title)


def default_title(price: str) -> str:
    return f"Product - ${price}"


def default_description(price: str, title: Optional[str] = None) -> str:
    if title is None:
        return f"<p>Product created with price ${price}</p>"
    return f"<p>{title} - Price: ${price}</p>"


def success_message(request: ProductCreationRequest) -> str:
    if request.custom_title:
        return f'Product "{request.title}" created successfully with price ${request.price}'
    return f"Product created successfully with price ${request.price}"


def from_price(price: Any) -> ProductCreationRequest:
    """Request for ``GET /create-product/{price}``; title and description are synthesized."""
    formatted = format_price(parse_price(price))
    return ProductCreationRequest(
        title=default_title(formatted),
        price=formatted,
        description_html=default_description(formatted),
        custom_title=False,
    )


def from_price_and_title(price: Any, title: str) -> ProductCreationRequest:
    """Request for ``GET /create-product/{price}/{title}``."""
    formatted = format_price(parse_price(price))
    decoded = decode_title(title)
    return ProductCreationRequest(
        title=decoded,
        price=formatted,
        description_html=default_description(formatted, decoded),
    )


def from_query(
    price: Any,
    title: Optional[str] = None,
    image: Optional[str] = None,
    description: Optional[str] = None,
    vendor: Optional[str] = None,
) -> ProductCreationRequest:
    """
    Request for ``GET /create-product-full/{price}``.

    A blank title is treated like a missing one and synthesized from the price.
    """
    formatted = format_price(parse_price(price))
    decoded = decode_title(title).strip() if title else ""
    if decoded:
        product_title = decoded
        fallback_description = default_description(formatted, decoded)
    else:
        product_title = default_title(formatted)
        fallback_description = default_description(formatted)
    return ProductCreationRequest(
        title=product_title,
        price=formatted,
        description_html=description or fallback_description,
        vendor=vendor or "",
        image_url=(image or "").strip(),
        custom_title=bool(decoded),
    )


def from_body(
    price: Any,
    title: Any,
    description: Optional[str] = None,
    vendor: Optional[str] = None,
    image_url: Optional[str] = None,
) -> ProductCreationRequest:
    """Request for ``POST /create-product``; the title is mandatory."""
    formatted = format_price(parse_price(price, POST_PRICE_ERROR), POST_PRICE_ERROR)
    if not isinstance(title, str) or not title.strip():
        raise MissingTitle()
    clean_title = title.strip()
    return ProductCreationRequest(
        title=clean_title,
        price=formatted,
        description_html=description or default_description(formatted, clean_title),
        vendor=vendor or "",
        image_url=(image_url or "").strip(),
    )
