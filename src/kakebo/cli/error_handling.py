"""CLI error handling helpers."""

import logging

import click

from kakebo.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error on stderr and exit with status 1."""
    logger.debug("%s in '%s'", type(error).__name__, ctx.command_path)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_input_error(ctx: click.Context, field: str, error: ValueError) -> None:
    """Render an unparseable option or argument and exit with status 1."""
    click.echo(f"Error: Invalid {field} format: {error}", err=True)
    ctx.exit(1)
