"""CLI command that runs the HTTP API."""

from __future__ import annotations

import click
import uvicorn

from marketplace.infrastructure.http.app import create_app


@click.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST).")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT).")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Run the marketplace API with uvicorn."""
    settings = ctx.find_root().obj
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )
