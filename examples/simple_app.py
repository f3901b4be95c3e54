from shopify_product_creator import AppConfig, create_app

config = AppConfig(
    shopify={
        "shop_name": "mystore",
        "api_key": "your_api_key",
        "password": "shppa_xxxxx",
        "api_version": "2024-01",
        "api_style": "graphql",
    },
)

app = create_app(config)

# Run: uvicorn examples.simple_app:app --reload
