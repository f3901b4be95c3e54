"""Example usage of the Shopify Product Creator without the HTTP layer."""

import asyncio
import json
from shopify_product_creator import AppConfig, create_product_creator
from shopify_product_creator import normalizer


async def main():
    """Example: Create products with both api styles in sandbox mode."""

    for api_style in ("graphql", "rest"):
        config = AppConfig(
            shopify={"shop_name": "mystore", "api_style": api_style},
            sandbox=True,
        )

        async with create_product_creator(config) as creator:
            request = normalizer.from_query(
                "19.9",
                title="Blue%20Shirt",
                image="https://example.com/shirt.jpg",
                vendor="Acme",
            )
            product = await creator.create_product(request)

            print(f"\n[{api_style}] {normalizer.success_message(request)}")
            print(json.dumps(
                product.model_dump(mode='json', by_alias=True),
                indent=2
            ))


if __name__ == "__main__":
    asyncio.run(main())
