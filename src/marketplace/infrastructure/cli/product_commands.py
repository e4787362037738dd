"""CLI commands for the catalog."""

from __future__ import annotations

import click

from marketplace.application.list_products import ListProductsHandler
from marketplace.domain.exceptions import DomainException
from marketplace.infrastructure.cli.context import container_from


@click.command("list")
@click.option("--vendor", "vendor_id", default=None, help="Only this vendor's products.")
@click.option("--sort", default=None, help="price_asc, price_desc, newest, oldest, name_asc, name_desc.")
@click.pass_context
def product_list(ctx: click.Context, vendor_id: str | None, sort: str | None) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=container_from(ctx).products)

    try:
        products = handler.by_vendor(vendor_id) if vendor_id else handler.handle(sort=sort)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Price':>10} {'Offer':>6} {'Stock':>6}")
    click.echo("-" * 84)
    for p in products:
        click.echo(f"{p.id:<34} {p.name:<24} {p.sale_price:>10} {p.offer + '%':>6} {p.stock:>6}")
