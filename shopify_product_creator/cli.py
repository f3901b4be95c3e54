"""Command-line interface for the Shopify Product Creator."""

import asyncio
import json
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table
from rich.json import JSON

from . import normalizer
from .adapter import create_product_creator
from .config import AppConfig
from .exceptions import ProductCreatorError

app = typer.Typer(
    name="shopify-product-creator",
    help="Create Shopify products over HTTP or from the terminal"
)
console = Console()


def load_config(config_path: Optional[str]) -> AppConfig:
    """Load configuration from a JSON file, or the environment when no path is given."""
    if config_path is None:
        return AppConfig.from_env()

    config_file = Path(config_path)
    if not config_file.exists():
        console.print(f"[red]Error: Config file not found: {config_path}[/red]")
        raise typer.Exit(1)

    with open(config_file) as f:
        config_data = json.load(f)

    return AppConfig(**config_data)


@app.command()
def init(
    output: str = typer.Option("config.json", help="Output configuration file path")
):
    """Initialize a new configuration file with example values."""
    example_config = {
        "shopify": {
            "shop_name": "your-store",
            "api_key": "your_api_key_here",
            "password": "your_api_password_here",
            "api_version": "2024-01",
            "api_style": "graphql",
            "timeout_seconds": None
        },
        "inventory": {
            "track_inventory": None,
            "inventory_policy": None
        },
        "cors": {
            "allow_origins": ["*"]
        },
        "sandbox": False,
        "log_level": "INFO"
    }

    output_path = Path(output)
    with open(output_path, 'w') as f:
        json.dump(example_config, f, indent=2)

    console.print(f"[green]✓[/green] Configuration file created: {output}")
    console.print("\n[yellow]⚠ Please edit the file and add your Shopify credentials![/yellow]")


@app.command()
def validate(
    config: Optional[str] = typer.Option(None, help="Configuration file path (environment if omitted)"),
):
    """Validate configuration."""
    try:
        cfg = load_config(config)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]✗ Configuration error:[/red] {str(e)}")
        raise typer.Exit(1)

    console.print("[green]✓[/green] Configuration is valid!")
    console.print(f"\n[bold]Shop:[/bold] {cfg.shopify.shop_domain}")
    console.print(f"[bold]API style:[/bold] {cfg.shopify.api_style}")
    console.print(f"[bold]API version:[/bold] {cfg.shopify.api_version}")
    timeout = cfg.shopify.timeout_seconds
    console.print(f"[bold]Timeout:[/bold] {f'{timeout}s' if timeout else 'none'}")
    console.print(f"[bold]Sandbox:[/bold] {cfg.sandbox}")


@app.command()
def serve(
    config: Optional[str] = typer.Option(None, help="Configuration file path (environment if omitted)"),
    host: str = typer.Option("0.0.0.0", help="Host to bind to"),
    port: int = typer.Option(3000, envvar="PORT", help="Port to bind to"),
    sandbox: bool = typer.Option(False, help="Answer upstream calls with the mock client"),
):
    """Start the product creation API."""
    from .app import configure_logging, create_app
    import uvicorn

    cfg = load_config(config)
    if sandbox:
        cfg.sandbox = True
    configure_logging(cfg.log_level)

    console.print(f"[green]Starting Shopify Product Creator on {host}:{port}[/green]")
    console.print(f"[blue]Shop: {cfg.shopify.shop_domain} ({cfg.shopify.api_style})[/blue]")
    if cfg.sandbox:
        console.print("[yellow]Sandbox mode: no request reaches Shopify[/yellow]")

    uvicorn.run(create_app(cfg), host=host, port=port)


@app.command()
def create(
    price: str = typer.Argument(..., help="Product price"),
    title: Optional[str] = typer.Option(None, help="Product title (generated from price if omitted)"),
    description: Optional[str] = typer.Option(None, help="HTML description"),
    vendor: Optional[str] = typer.Option(None, help="Vendor name"),
    image: Optional[str] = typer.Option(None, help="Image URL (REST api style only)"),
    config: Optional[str] = typer.Option(None, help="Configuration file path (environment if omitted)"),
    sandbox: bool = typer.Option(False, help="Answer upstream calls with the mock client"),
):
    """Create one product and print the normalized result."""

    async def _create():
        cfg = load_config(config)
        if sandbox:
            cfg.sandbox = True
        request = normalizer.from_query(price, title, image, description, vendor)

        async with create_product_creator(cfg) as creator:
            console.print(f"[blue]Creating {request.title!r} via {creator.api_style}...[/blue]")
            product = await creator.create_product(request)

        table = Table(title="Created Product")
        table.add_column("ID", style="cyan")
        table.add_column("Title", style="green")
        table.add_column("Variants", justify="right", style="yellow")
        table.add_column("Images", justify="right", style="magenta")
        table.add_row(
            product.id,
            product.title[:50] + "..." if len(product.title) > 50 else product.title,
            str(len(product.variants.nodes)),
            str(len(product.images.nodes))
        )
        console.print(table)
        console.print(f"\n[green]✓[/green] {normalizer.success_message(request)}")
        console.print(JSON(
            json.dumps(product.model_dump(mode='json', by_alias=True), indent=2)
        ))

    try:
        asyncio.run(_create())
    except ProductCreatorError as e:
        console.print(f"[red]✗ {e.error}[/red]")
        if e.details is not None:
            console.print(JSON(json.dumps(e.details, default=str)))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
