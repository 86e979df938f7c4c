"""Seed the register with default categories and letter types."""

import click
from letterdesk.cli.actor_resolution import current_actor
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.category import CategoryService
from letterdesk.domain.entities import Actor, Role
from letterdesk.domain.errors import DomainError
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.domain.user import UserService


# (name, prefix, description, letter types)
DEFAULT_CATEGORIES = [
    (
        "Official Letters",
        "OFF",
        "Official government correspondence",
        ["Appointment Letter", "Transfer Order", "Leave Sanction"],
    ),
    (
        "Circulars",
        "CIR",
        "Policy and procedural circulars",
        ["Policy Circular", "Administrative Circular"],
    ),
    (
        "Certificates",
        "CERT",
        "Various types of certificates",
        ["Experience Certificate", "Service Certificate"],
    ),
    (
        "Notifications",
        "NOT",
        "Public notifications and announcements",
        ["Public Notice", "Tender Notice"],
    ),
]


@click.command("seed")
@click.option("--admin-name", default="Admin User", help="Name of the first administrator")
@click.option("--admin-email", default="admin@demo.com", help="Email of the first administrator")
@click.pass_context
def seed(ctx, admin_name: str, admin_email: str):
    """Create the default categories and letter types.

    On an empty database the first administrator is created too. Records
    that already exist are left alone, so seeding twice is harmless.
    """
    db = ctx.obj["db"]
    user_service = UserService(db)
    category_service = CategoryService(db)
    letter_type_service = LetterTypeService(db)

    try:
        admins = user_service.list_users(role=Role.ADMIN)
        if not admins:
            admin = user_service.create_user(None, name=admin_name, email=admin_email)
            click.echo(f"Created administrator '{admin.name}' <{admin.email}> (ID: {admin.id})")
            actor = Actor.from_user(admin)
        elif ctx.obj.get("user"):
            actor = current_actor(ctx)
        else:
            actor = Actor.from_user(admins[0])

        created_categories = 0
        created_types = 0
        for name, prefix, description, type_names in DEFAULT_CATEGORIES:
            category = category_service.find_by_name(name)
            if category is None:
                category = category_service.create_category(
                    actor, name=name, prefix=prefix, description=description
                )
                created_categories += 1
            for type_name in type_names:
                if letter_type_service.find_by_name(type_name, category_id=category.id) is None:
                    letter_type_service.create_letter_type(actor, name=type_name, category_id=category.id)
                    created_types += 1
    except DomainError as e:
        handle_domain_error(ctx, e)

    if created_categories == 0 and created_types == 0:
        click.echo("Default categories and letter types already exist.")
        return
    click.echo(f"Created {created_categories} categories and {created_types} letter types.")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
