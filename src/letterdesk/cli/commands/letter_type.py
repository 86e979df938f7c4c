"""Letter type management commands."""

import click
from letterdesk.cli.actor_resolution import current_actor
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.category import CategoryService
from letterdesk.domain.errors import DomainError
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.utils.resolvers import resolve_category, resolve_letter_type


@click.group()
def letter_type_group():
    """Manage letter types within categories."""
    pass


@letter_type_group.command("list")
@click.option("--category", help="Only letter types of this category (name or ID)")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated letter types")
@click.pass_context
def list_letter_types(ctx, category: str | None, include_inactive: bool):
    """List letter types."""
    db = ctx.obj["db"]
    service = LetterTypeService(db)
    category_service = CategoryService(db)

    category_id = None
    if category:
        try:
            category_id = resolve_category(category_service, category)
        except DomainError as e:
            handle_domain_error(ctx, e)

    letter_types = service.list_letter_types(category_id=category_id, include_inactive=include_inactive)
    if not letter_types:
        click.echo("No letter types found.")
        return

    categories = {c.id: c.name for c in category_service.list_categories(include_inactive=True)}
    click.echo(f"\n{'ID':<6} {'Name':<32} {'Category'}")
    click.echo("-" * 70)
    for lt in letter_types:
        marker = "" if lt.is_active else " (inactive)"
        click.echo(f"{lt.id:<6} {lt.name + marker:<32} {categories.get(lt.category_id, 'Unknown')}")


@letter_type_group.command("create")
@click.argument("name")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--description", help="Letter type description")
@click.pass_context
def create_letter_type(ctx, name: str, category: str, description: str | None):
    """Create a letter type under a category (administrators only)."""
    actor = current_actor(ctx)
    db = ctx.obj["db"]
    service = LetterTypeService(db)

    try:
        category_id = resolve_category(CategoryService(db), category)
        letter_type = service.create_letter_type(
            actor, name=name, category_id=category_id, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created letter type '{letter_type.name}' (ID: {letter_type.id})")


@letter_type_group.command("update")
@click.argument("letter_type")
@click.option("--name", help="New name")
@click.option("--category", help="Move to this category (name or ID)")
@click.option("--description", help="New description")
@click.pass_context
def update_letter_type(
    ctx, letter_type: str, name: str | None, category: str | None, description: str | None
):
    """Update a letter type by name or ID (administrators only)."""
    actor = current_actor(ctx)
    db = ctx.obj["db"]
    service = LetterTypeService(db)

    if name is None and category is None and description is None:
        click.echo("Error: Nothing to update; pass --name, --category or --description", err=True)
        ctx.exit(1)

    try:
        letter_type_id = resolve_letter_type(service, letter_type)
        category_id = resolve_category(CategoryService(db), category) if category else None
        updated = service.update_letter_type(
            actor, letter_type_id, name=name, category_id=category_id, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated letter type '{updated.name}' (ID: {updated.id})")


@letter_type_group.command("delete")
@click.argument("letter_type")
@click.pass_context
def delete_letter_type(ctx, letter_type: str):
    """Deactivate a letter type by name or ID (administrators only)."""
    actor = current_actor(ctx)
    service = LetterTypeService(ctx.obj["db"])

    try:
        letter_type_id = resolve_letter_type(service, letter_type)
        service.deactivate_letter_type(actor, letter_type_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated letter type ID {letter_type_id}")


def register_commands(cli):
    """Register letter type commands with main CLI."""
    cli.add_command(letter_type_group, name="letter-type")
