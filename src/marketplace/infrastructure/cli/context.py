"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from marketplace.infrastructure.bootstrap import Container, build_container


def container_from(ctx: click.Context) -> Container:
    return build_container(ctx.find_root().obj)
