"""CLI commands for user accounts."""

from __future__ import annotations

import click

from marketplace.application.auth import RegisterUserHandler
from marketplace.domain.exceptions import DomainException
from marketplace.domain.model.user import Role
from marketplace.infrastructure.cli.context import container_from


@click.command("create")
@click.option("--username", required=True, help="Login name.")
@click.option("--email", required=True, help="Email address.")
@click.option("--password", required=True, prompt=True, hide_input=True, help="Password.")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.CUSTOMER.value,
    show_default=True,
    help="Account role; admins can only be created here.",
)
@click.pass_context
def user_create(ctx: click.Context, username: str, email: str, password: str, role: str) -> None:
    """Create a user account."""
    container = container_from(ctx)
    handler = RegisterUserHandler(container.users, container.hasher)

    try:
        dto = handler.handle(
            username=username,
            email=email,
            password=password,
            role=role,
            allow_admin=True,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {dto.id} '{dto.username}' created (role={dto.role})")
