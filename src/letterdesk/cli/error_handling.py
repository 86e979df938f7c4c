"""CLI error handling helpers."""

import click

from letterdesk.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error with its stable code and exit with failure."""
    click.echo(f"Error [{error.code}]: {error}", err=True)
    if isinstance(error, ValidationError) and len(error.errors) > 1:
        for problem in error.errors:
            click.echo(f"  - {problem}", err=True)
    ctx.exit(1)
