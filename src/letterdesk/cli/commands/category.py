"""Category management commands."""

import click
from letterdesk.cli.actor_resolution import current_actor
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.category import CategoryService
from letterdesk.domain.errors import DomainError
from letterdesk.utils.resolvers import resolve_category


@click.group()
def category_group():
    """Manage document categories."""
    pass


@category_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated categories")
@click.pass_context
def list_categories(ctx, include_inactive: bool):
    """List categories."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(include_inactive=include_inactive)
    if not categories:
        click.echo("No categories found. Run 'seed' to create the default categories.")
        return

    click.echo(f"\n{'ID':<6} {'Prefix':<8} {'Name':<30} {'Description'}")
    click.echo("-" * 80)
    for cat in categories:
        marker = "" if cat.is_active else " (inactive)"
        click.echo(f"{cat.id:<6} {cat.prefix:<8} {cat.name + marker:<30} {cat.description or ''}")


@category_group.command("create")
@click.argument("name")
@click.option("--prefix", required=True, help="Short code used in letter numbers (e.g., OFF)")
@click.option("--description", help="Category description")
@click.pass_context
def create_category(ctx, name: str, prefix: str, description: str | None):
    """Create a new category (administrators only)."""
    actor = current_actor(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category = service.create_category(actor, name=name, prefix=prefix, description=description)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{category.name}' [{category.prefix}] (ID: {category.id})")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--prefix", help="New prefix (existing letter numbers are unchanged)")
@click.option("--description", help="New description")
@click.pass_context
def update_category(ctx, category: str, name: str | None, prefix: str | None, description: str | None):
    """Update a category by name or ID (administrators only)."""
    actor = current_actor(ctx)
    service = CategoryService(ctx.obj["db"])

    if name is None and prefix is None and description is None:
        click.echo("Error: Nothing to update; pass --name, --prefix or --description", err=True)
        ctx.exit(1)

    try:
        category_id = resolve_category(service, category)
        updated = service.update_category(
            actor, category_id, name=name, prefix=prefix, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category '{updated.name}' [{updated.prefix}] (ID: {updated.id})")


@category_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_category(ctx, category: str):
    """Deactivate a category by name or ID (administrators only).

    Existing documents keep their category; it can no longer be chosen for
    new ones.
    """
    actor = current_actor(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = resolve_category(service, category)
        service.deactivate_category(actor, category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated category ID {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
