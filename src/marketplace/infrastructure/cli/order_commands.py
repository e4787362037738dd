"""CLI commands for orders."""

from __future__ import annotations

import click

from marketplace.application.dto import OrderDTO
from marketplace.application.lookups import require_order
from marketplace.domain.exceptions import DomainException
from marketplace.infrastructure.cli.context import container_from


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.price_at_purchase:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<31} {dto.total:>20}")
    if dto.refunded_amount != "0.00":
        click.echo(f"  {'Refunded':<31} {dto.refunded_amount:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_context
def order_show(ctx: click.Context, order_id: str) -> None:
    """Show details of an existing order."""
    container = container_from(ctx)

    try:
        order = require_order(container.orders, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(OrderDTO.from_order(order))
