from dataclasses import replace
from pathlib import Path

import click

from marketplace.infrastructure.cli.order_commands import order_show
from marketplace.infrastructure.cli.product_commands import product_list
from marketplace.infrastructure.cli.report_commands import report_summary
from marketplace.infrastructure.cli.server_commands import serve
from marketplace.infrastructure.cli.user_commands import user_create
from marketplace.infrastructure.config import ConfigurationError, Settings
from marketplace.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the JSON collections (overrides MARKETPLACE_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None) -> None:
    """Marketplace: multi-vendor shop backend"""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    if data_dir:
        settings = replace(settings, data_dir=Path(data_dir))
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def user() -> None:
    """Manage user accounts."""


@cli.group()
def product() -> None:
    """Inspect the catalog."""


@cli.group()
def order() -> None:
    """Inspect orders."""


@cli.group()
def report() -> None:
    """Admin reports."""


# Register subcommands
cli.add_command(serve)
user.add_command(user_create)
product.add_command(product_list)
order.add_command(order_show)
report.add_command(report_summary)
