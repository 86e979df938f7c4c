"""CLI helpers for identifying the acting user."""

from __future__ import annotations

import click
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.entities import Actor
from letterdesk.domain.errors import DomainError
from letterdesk.domain.user import UserService
from letterdesk.utils.resolvers import resolve_user


def current_actor(ctx: click.Context, required: bool = True) -> Actor | None:
    """Resolve the --as user into an Actor, or exit with a CLI error.

    Authentication happens outside letterdesk; the named user is trusted.
    """
    user_ref = ctx.obj.get("user")
    if not user_ref:
        if not required:
            return None
        click.echo("Error: This command needs a user; pass --as or set LETTERDESK_USER", err=True)
        ctx.exit(1)

    service = UserService(ctx.obj["db"])
    try:
        user = service.require_user(resolve_user(service, user_ref))
    except DomainError as exc:
        handle_domain_error(ctx, exc)
    if not user.is_active:
        click.echo(f"Error: User '{user.email}' is inactive", err=True)
        ctx.exit(1)
    return Actor.from_user(user)
