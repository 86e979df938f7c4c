"""Public verification command."""

import click
from letterdesk.domain.verification import VerificationService


@click.command("verify")
@click.argument("letter_number")
@click.option("--reference-number", help="Reference number printed on the letter")
@click.option("--issue-date", help="Date of issue printed on the letter")
@click.pass_context
def verify_document(ctx, letter_number: str, reference_number: str | None, issue_date: str | None):
    """Check a letter against the register.

    With only LETTER_NUMBER the letter is looked up by number. Passing
    --reference-number and --issue-date checks all three details. No user
    is needed. Exits with status 2 when the letter is not verified.
    """
    service = VerificationService(ctx.obj["db"])

    if (reference_number is None) != (issue_date is None):
        click.echo("Error: --reference-number and --issue-date must be given together", err=True)
        ctx.exit(1)

    if reference_number is None:
        result = service.verify_letter_number(letter_number)
    else:
        result = service.verify(letter_number, reference_number, issue_date)

    if not result.is_verified:
        click.echo(f"NOT VERIFIED: {result.message}")
        ctx.exit(2)

    summary = result.summary
    click.echo("VERIFIED")
    click.echo(f"  Title: {summary.title}")
    click.echo(f"  Letter Number: {summary.letter_number}")
    click.echo(f"  Reference Number: {summary.reference_number}")
    click.echo(f"  Issue Date: {summary.issue_date}")
    click.echo(f"  Category: {summary.category}")
    click.echo(f"  Letter Type: {summary.letter_type}")
    click.echo(f"  Status: {summary.status}")


def register_commands(cli):
    """Register verify command with main CLI."""
    cli.add_command(verify_document)
