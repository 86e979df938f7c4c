"""Spreadsheet import commands."""

import click
from letterdesk.cli.actor_resolution import current_actor
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.errors import DomainError
from letterdesk.domain.spreadsheet_import import SpreadsheetImportService


@click.command("import")
@click.argument("spreadsheet", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_spreadsheet(ctx, spreadsheet: str):
    """Import documents from an .xlsx or .csv file.

    Every valid row becomes a Draft owned by the acting user. Invalid rows
    are reported and skipped.
    """
    actor = current_actor(ctx)
    service = SpreadsheetImportService(ctx.obj["db"])

    try:
        result = service.import_file(actor, spreadsheet)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Created: {result['created']} documents")
    click.echo(f"  Skipped: {result['skipped']} rows")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


@click.command("import-template")
@click.argument("output", type=click.Path(dir_okay=False))
@click.pass_context
def import_template(ctx, output: str):
    """Write an .xlsx template listing the current categories and letter types."""
    service = SpreadsheetImportService(ctx.obj["db"])

    path = service.write_template(output)
    click.echo(f"Template written to {path}")


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_spreadsheet)
    cli.add_command(import_template)
