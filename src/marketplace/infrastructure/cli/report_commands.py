"""CLI commands for admin reports."""

from __future__ import annotations

import click

from marketplace.application.reporting import AnalyticsHandler
from marketplace.infrastructure.cli.context import container_from


@click.command("summary")
@click.pass_context
def report_summary(ctx: click.Context) -> None:
    """Print store-wide totals and best sellers."""
    container = container_from(ctx)
    summary = AnalyticsHandler(container.users, container.products, container.orders).summary()

    click.echo(f"Users:    {summary.total_users}")
    click.echo(f"Products: {summary.total_products}")
    click.echo(f"Orders:   {summary.total_orders}")
    click.echo(f"Revenue:  ${summary.total_revenue}")
    click.echo()
    click.echo("Top products:")
    if not summary.top_products:
        click.echo("  (no sales yet)")
    for top in summary.top_products:
        click.echo(f"  {top.product_name:<24} {top.total_sold:>6}")
