"""Document commands: create, list, view, edit, delete and the approval workflow."""

import click
from letterdesk.cli.actor_resolution import current_actor
from letterdesk.cli.error_handling import handle_domain_error
from letterdesk.domain.category import CategoryService
from letterdesk.domain.document import DocumentService
from letterdesk.domain.entities import DocumentDetail, DocumentStatus
from letterdesk.domain.errors import DomainError, ValidationError
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.domain.workflow import WorkflowService
from letterdesk.utils.date_parser import format_issue_date
from letterdesk.utils.resolvers import resolve_category, resolve_letter_type

STATUS_CHOICES = [s.value for s in DocumentStatus]


def _read_content(content: str | None, content_file: str | None) -> str | None:
    if content_file:
        try:
            with open(content_file, encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise ValidationError(f"Content file {content_file} is not valid UTF-8 text") from e
    return content


def print_document(detail: DocumentDetail) -> None:
    """Print all fields of one document."""
    doc = detail.document
    click.echo(f"\nDocument ID: {doc.id}")
    click.echo(f"  Title: {doc.title}")
    click.echo(f"  Letter Number: {doc.letter_number}")
    click.echo(f"  Reference Number: {doc.reference_number}")
    click.echo(f"  Issue Date: {format_issue_date(doc.issue_date)}")
    click.echo(f"  Category: {detail.category_name} [{detail.category_prefix}]")
    click.echo(f"  Letter Type: {detail.letter_type_name}")
    click.echo(f"  Status: {doc.status.value}")
    click.echo(f"  Created By: {detail.created_by_name} on {doc.created_at:%Y-%m-%d %H:%M}")
    if doc.status == DocumentStatus.APPROVED and doc.approved_at is not None:
        click.echo(f"  Approved By: {detail.approved_by_name} on {doc.approved_at:%Y-%m-%d %H:%M}")
    if doc.rejection_reason:
        click.echo(f"  Rejection Reason: {doc.rejection_reason}")
    click.echo("  Content:")
    for line in doc.content.splitlines() or [""]:
        click.echo(f"    {line}")


@click.group()
def document_group():
    """Manage documents."""
    pass


@document_group.command("create")
@click.option("--title", required=True, help="Document title")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--letter-type", required=True, help="Letter type name or ID (must belong to the category)")
@click.option("--issue-date", required=True, help="Date of issue (e.g., 2025-03-05, '5 March 2025', today)")
@click.option("--content", help="Document body text")
@click.option("--content-file", type=click.Path(exists=True, dir_okay=False), help="Read body text from a file")
@click.option("--letter-number", help="Letter number (generated when omitted)")
@click.option("--reference-number", help="Reference number (generated when omitted)")
@click.option("--submit", is_flag=True, help="Create as Pending instead of Draft")
@click.pass_context
def create_document(
    ctx,
    title: str,
    category: str,
    letter_type: str,
    issue_date: str,
    content: str | None,
    content_file: str | None,
    letter_number: str | None,
    reference_number: str | None,
    submit: bool,
):
    """Create a document owned by the acting user."""
    actor = current_actor(ctx)
    db = ctx.obj["db"]
    service = DocumentService(db)

    try:
        category_id = resolve_category(CategoryService(db), category)
        letter_type_id = resolve_letter_type(LetterTypeService(db), letter_type, category_id=category_id)
        document = service.create_document(
            actor,
            title=title,
            category_id=category_id,
            letter_type_id=letter_type_id,
            issue_date=issue_date,
            content=_read_content(content, content_file),
            letter_number=letter_number,
            reference_number=reference_number,
            status=DocumentStatus.PENDING if submit else DocumentStatus.DRAFT,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created document {document.id} ({document.status.value})")
    click.echo(f"  Letter Number: {document.letter_number}")
    click.echo(f"  Reference Number: {document.reference_number}")


@document_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="Filter by status")
@click.option("--category", help="Filter by category name or ID")
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each document")
@click.pass_context
def list_documents(ctx, status: str | None, category: str | None, verbose: bool):
    """List documents, newest first.

    Administrators see every document; staff see their own.
    """
    actor = current_actor(ctx)
    db = ctx.obj["db"]
    service = DocumentService(db)

    try:
        category_id = resolve_category(CategoryService(db), category) if category else None
        documents = service.list_documents(actor, status=status, category_id=category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not documents:
        click.echo("No documents found.")
        return

    details = service.describe(documents)
    if verbose:
        click.echo(f"\nFound {len(details)} document(s):")
        click.echo("=" * 100)
        for detail in details:
            print_document(detail)
        return

    click.echo(f"\nFound {len(details)} document(s):")
    click.echo(f"{'ID':<6} {'Issue Date':<18} {'Letter Number':<20} {'Status':<9} {'Category':<18} {'Title'}")
    click.echo("-" * 110)
    for detail in details:
        doc = detail.document
        title = doc.title[:40] + "..." if len(doc.title) > 43 else doc.title
        click.echo(
            f"{doc.id:<6} {format_issue_date(doc.issue_date):<18} {doc.letter_number:<20} "
            f"{doc.status.value:<9} {detail.category_name[:18]:<18} {title}"
        )


@document_group.command("view")
@click.argument("document_id", type=int)
@click.pass_context
def view_document(ctx, document_id: int):
    """Show one document in full."""
    actor = current_actor(ctx)
    service = DocumentService(ctx.obj["db"])

    try:
        document = service.get_document(actor, document_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_document(service.describe([document])[0])


@document_group.command("update")
@click.argument("document_id", type=int)
@click.option("--title", help="New title")
@click.option("--category", help="New category name or ID")
@click.option("--letter-type", help="New letter type name or ID")
@click.option("--issue-date", help="New date of issue")
@click.option("--content", help="New body text")
@click.option("--content-file", type=click.Path(exists=True, dir_okay=False), help="Read new body text from a file")
@click.option("--letter-number", help="New letter number")
@click.option("--reference-number", help="New reference number")
@click.pass_context
def update_document(
    ctx,
    document_id: int,
    title: str | None,
    category: str | None,
    letter_type: str | None,
    issue_date: str | None,
    content: str | None,
    content_file: str | None,
    letter_number: str | None,
    reference_number: str | None,
):
    """Edit a document's fields.

    Use submit, approve or reject to change its status.
    """
    actor = current_actor(ctx)
    db = ctx.obj["db"]
    service = DocumentService(db)

    try:
        changes = {
            "title": title,
            "issue_date": issue_date,
            "content": _read_content(content, content_file),
            "letter_number": letter_number,
            "reference_number": reference_number,
        }
        if category or letter_type:
            current = service.get_document(actor, document_id)
            category_id = resolve_category(CategoryService(db), category) if category else current.category_id
            changes["category_id"] = category_id
            if letter_type:
                changes["letter_type_id"] = resolve_letter_type(
                    LetterTypeService(db), letter_type, category_id=category_id
                )
        changes = {field: value for field, value in changes.items() if value is not None}
        if not changes:
            click.echo("Error: Nothing to update", err=True)
            ctx.exit(1)
        document = service.update_document(actor, document_id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated document {document.id} ({document.letter_number})")


@document_group.command("delete")
@click.argument("document_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_document(ctx, document_id: int, yes: bool):
    """Permanently delete a document."""
    actor = current_actor(ctx)
    service = DocumentService(ctx.obj["db"])

    try:
        document = service.get_document(actor, document_id)
        if not yes:
            click.confirm(f"Delete document {document_id} ({document.letter_number})?", abort=True)
        service.delete_document(actor, document_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted document {document_id}")


@document_group.command("stats")
@click.pass_context
def document_stats(ctx):
    """Show document counts per status."""
    actor = current_actor(ctx)
    service = DocumentService(ctx.obj["db"])

    try:
        counts = service.status_counts(actor)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nDocuments by status:")
    for status in DocumentStatus:
        click.echo(f"  {status.value:<10} {counts.get(status, 0):>6}")
    click.echo(f"  {'Total':<10} {sum(counts.values()):>6}")


@document_group.command("submit")
@click.argument("document_id", type=int)
@click.pass_context
def submit_document(ctx, document_id: int):
    """Submit a draft for approval."""
    actor = current_actor(ctx)
    workflow = WorkflowService(ctx.obj["db"])

    try:
        document = workflow.submit(actor, document_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Document {document.id} is now {document.status.value}")


@document_group.command("approve")
@click.argument("document_id", type=int)
@click.pass_context
def approve_document(ctx, document_id: int):
    """Approve a pending document (administrators only)."""
    actor = current_actor(ctx)
    workflow = WorkflowService(ctx.obj["db"])

    try:
        document = workflow.approve(actor, document_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Document {document.id} is now {document.status.value}")


@document_group.command("reject")
@click.argument("document_id", type=int)
@click.option("--reason", required=True, help="Why the document is rejected")
@click.pass_context
def reject_document(ctx, document_id: int, reason: str):
    """Reject a pending document (administrators only)."""
    actor = current_actor(ctx)
    workflow = WorkflowService(ctx.obj["db"])

    try:
        document = workflow.reject(actor, document_id, reason)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Document {document.id} is now {document.status.value}: {document.rejection_reason}")


def register_commands(cli):
    """Register document commands with main CLI."""
    cli.add_command(document_group, name="document")
