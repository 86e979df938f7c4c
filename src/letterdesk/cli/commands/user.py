"""User management commands."""

import click
from letterdesk.cli.actor_resolution import current_actor
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.entities import Role
from letterdesk.domain.errors import DomainError
from letterdesk.domain.user import UserService
from letterdesk.utils.resolvers import resolve_user


@click.group()
def user_group():
    """Manage administrators and staff."""
    pass


@user_group.command("create")
@click.argument("name")
@click.argument("email")
@click.option(
    "--role",
    type=click.Choice(["admin", "staff"], case_sensitive=False),
    default="staff",
    help="User role (default: staff). The first user is always an admin.",
)
@click.pass_context
def create_user(ctx, name: str, email: str, role: str):
    """Create a user.

    The first user can be created without --as and becomes an administrator.
    After that, only administrators can add users.
    """
    service = UserService(ctx.obj["db"])
    actor = current_actor(ctx, required=False)

    try:
        user = service.create_user(actor, name=name, email=email, role=Role(role.lower()))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {user.role.value} '{user.name}' <{user.email}> (ID: {user.id})")


@user_group.command("list")
@click.option("--role", type=click.Choice(["admin", "staff"], case_sensitive=False), help="Filter by role")
@click.pass_context
def list_users(ctx, role: str | None):
    """List users."""
    service = UserService(ctx.obj["db"])

    users = service.list_users(role=Role(role.lower()) if role else None)
    if not users:
        click.echo("No users found. Create one with 'user create NAME EMAIL'.")
        return

    click.echo(f"\n{'ID':<6} {'Role':<7} {'Name':<28} {'Email'}")
    click.echo("-" * 80)
    for u in users:
        click.echo(f"{u.id:<6} {u.role.value:<7} {u.name:<28} {u.email}")


@user_group.command("delete")
@click.argument("user")
@click.pass_context
def delete_user(ctx, user: str):
    """Delete a user by email or ID (administrators only).

    Users who still own documents cannot be deleted.
    """
    actor = current_actor(ctx)
    service = UserService(ctx.obj["db"])

    try:
        user_id = resolve_user(service, user)
        service.delete_user(actor, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted user ID {user_id}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
