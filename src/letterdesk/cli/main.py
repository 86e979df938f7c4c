"""Main CLI entry point."""

import logging
import sys

import click
from letterdesk.config import load_settings
from letterdesk.database.factories import create_sqlite_database

# Import and register all commands at module level
from letterdesk.cli.commands import (
    category,
    document,
    import_cmd,
    letter_type,
    seed,
    user,
    verify,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str) -> None:
    """Configure application-wide logging on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LETTERDESK_DB_PATH environment variable)",
    envvar="LETTERDESK_DB_PATH",
)
@click.option(
    "--as",
    "user",
    help="Acting user's email or ID (overrides LETTERDESK_USER environment variable)",
    envvar="LETTERDESK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LETTERDESK_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str | None, log_level: str | None):
    """Letterdesk - official letter register.

    Create and approve official letters, import them in bulk from
    spreadsheets, and verify letters presented by the public.
    """
    ctx.ensure_object(dict)
    settings = load_settings()
    setup_logging(log_level or settings.log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user
        ctx.obj["settings"] = settings
        ctx.call_on_close(db.disconnect)


# Register all commands
category.register_commands(cli)
letter_type.register_commands(cli)
document.register_commands(cli)
import_cmd.register_commands(cli)
user.register_commands(cli)
verify.register_commands(cli)
seed.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
