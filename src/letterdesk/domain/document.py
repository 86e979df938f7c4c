"""Document domain service."""

import logging
from datetime import date, datetime, UTC
from typing import Any, Callable, Iterable, Optional

from letterdesk.database.base import Database
from letterdesk.domain.access import AccessPolicy
from letterdesk.domain.category import CategoryService
from letterdesk.domain.entities import (
    Actor,
    Category,
    Document as DocumentEntity,
    DocumentDetail,
    DocumentStatus,
    LetterType,
)
from letterdesk.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    document_not_found,
    duplicate_letter_number,
)
from letterdesk.domain.identifiers import IdentifierService
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.utils.date_parser import coerce_date

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "title",
        "category_id",
        "letter_type_id",
        "letter_number",
        "reference_number",
        "issue_date",
        "content",
    }
)
# Only the status workflow writes these
WORKFLOW_FIELDS = frozenset({"status", "approved_by", "approved_at", "rejection_reason"})
INITIAL_STATUSES = (DocumentStatus.DRAFT, DocumentStatus.PENDING)


def utc_now() -> datetime:
    return datetime.now(UTC)


def local_now() -> datetime:
    return datetime.now().astimezone()


class DocumentService:
    """Service for creating, reading, editing and deleting documents.

    Status changes are not made here; see ``WorkflowService``.
    """

    def __init__(
        self,
        db: Database,
        policy: Optional[AccessPolicy] = None,
        identifiers: Optional[IdentifierService] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        """Initialize document service.

        Args:
            db: Database instance
            policy: Access policy (defaults to the standard one)
            identifiers: Generator for missing letter/reference numbers
            clock: Returns the current local time; issue dates after its date are rejected
        """
        self.db = db
        self.policy = policy or AccessPolicy()
        self.identifiers = identifiers or IdentifierService(db)
        self.clock = clock
        self.category_service = CategoryService(db, self.policy)
        self.letter_type_service = LetterTypeService(db, self.policy)

    def create_document(
        self,
        actor: Actor,
        title: str,
        category_id: int,
        letter_type_id: int,
        issue_date: "date | str",
        content: str,
        letter_number: Optional[str] = None,
        reference_number: Optional[str] = None,
        status: "DocumentStatus | str" = DocumentStatus.DRAFT,
    ) -> DocumentEntity:
        """Create a document owned by actor.

        Args:
            actor: Creating user
            title: Document title
            category_id: Category ID
            letter_type_id: Letter type ID; must belong to the category
            issue_date: Date of issue (date or parseable string), not in the future
            content: Body text
            letter_number: Explicit letter number, generated when blank
            reference_number: Explicit reference number, generated when blank
            status: Draft (default) or Pending

        Returns:
            The created document

        Raises:
            ValidationError: If any field is missing or malformed
            NotFoundError: If category or letter type does not resolve
            ConflictError: If the letter number is already taken
        """
        problems: list[str] = []
        title = self._required_text(title, "Title", problems)
        content = self._required_text(content, "Content", problems)
        parsed_date = self._issue_date(issue_date, problems)
        try:
            initial_status = DocumentStatus.parse(status)
            if initial_status not in INITIAL_STATUSES:
                problems.append(
                    f"New documents must start as Draft or Pending, not {initial_status.value}"
                )
        except ValueError as e:
            problems.append(str(e))
        if problems:
            raise ValidationError("Validation errors: " + "; ".join(problems), problems)

        category, _ = self._resolve_references(category_id, letter_type_id)

        letter_number = (letter_number or "").strip()
        if letter_number:
            if self.db.letter_number_exists(letter_number):
                raise ConflictError(duplicate_letter_number(letter_number))
        else:
            letter_number = self.identifiers.next_letter_number(category, parsed_date)

        reference_number = (reference_number or "").strip()
        if not reference_number:
            reference_number = self.identifiers.next_reference_number(category, parsed_date)

        document_id = self.db.create_document(
            title=title,
            category_id=category_id,
            letter_type_id=letter_type_id,
            letter_number=letter_number,
            reference_number=reference_number,
            issue_date=parsed_date,
            content=content,
            status=initial_status,
            created_by=actor.id,
        )
        logger.info(
            "Document %s (%s) created by user %s as %s",
            document_id,
            letter_number,
            actor.id,
            initial_status.value,
        )
        return self.get_document(actor, document_id)

    def get_document(self, actor: Actor, document_id: int) -> DocumentEntity:
        """Get a document visible to actor.

        Raises:
            NotFoundError: If the document is missing or belongs to someone else
        """
        document = self.db.get_document(document_id, owner_id=self.policy.owner_filter(actor))
        if document is None:
            raise NotFoundError(document_not_found(document_id))
        return document

    def list_documents(
        self,
        actor: Actor,
        status: "DocumentStatus | str | None" = None,
        category_id: Optional[int] = None,
    ) -> list[DocumentEntity]:
        """List documents visible to actor, newest first."""
        if status is not None:
            try:
                status = DocumentStatus.parse(status)
            except ValueError as e:
                raise ValidationError(str(e)) from e
        return self.db.list_documents(
            owner_id=self.policy.owner_filter(actor),
            status=status,
            category_id=category_id,
        )

    def update_document(self, actor: Actor, document_id: int, **changes: Any) -> DocumentEntity:
        """Update content fields of a document.

        Only the fields in ``EDITABLE_FIELDS`` may be passed. Status and the
        approval fields are refused for every caller; they change only
        through the status workflow.

        Raises:
            ValidationError: If a field is unknown, protected or invalid
            NotFoundError: If the document is not visible to actor
            AuthorizationError: If staff edit a document that is already decided
            ConflictError: If the new letter number is taken
        """
        protected = sorted(set(changes) & WORKFLOW_FIELDS)
        if protected:
            raise ValidationError(
                f"Field(s) {', '.join(protected)} can only be changed through a status transition"
            )
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown or read-only field(s): {', '.join(unknown)}")

        document = self.get_document(actor, document_id)
        self.policy.require_editable(actor, document)

        problems: list[str] = []
        cleaned: dict[str, Any] = {}
        for field in ("title", "content", "letter_number", "reference_number"):
            if changes.get(field) is not None:
                label = field.replace("_", " ").capitalize()
                cleaned[field] = self._required_text(changes[field], label, problems)
        if changes.get("issue_date") is not None:
            cleaned["issue_date"] = self._issue_date(changes["issue_date"], problems)
        if problems:
            raise ValidationError("Validation errors: " + "; ".join(problems), problems)

        category_id = changes.get("category_id")
        letter_type_id = changes.get("letter_type_id")
        if category_id is not None or letter_type_id is not None:
            category_id = category_id if category_id is not None else document.category_id
            letter_type_id = letter_type_id if letter_type_id is not None else document.letter_type_id
            self._resolve_references(category_id, letter_type_id)
            cleaned["category_id"] = category_id
            cleaned["letter_type_id"] = letter_type_id

        new_number = cleaned.get("letter_number")
        if new_number is not None and self.db.letter_number_exists(new_number, exclude_id=document_id):
            raise ConflictError(duplicate_letter_number(new_number))

        if cleaned:
            self.db.update_document(document_id, **cleaned)
            logger.info(
                "Document %s updated by user %s (%s)",
                document_id,
                actor.id,
                ", ".join(sorted(cleaned)),
            )
        return self.get_document(actor, document_id)

    def delete_document(self, actor: Actor, document_id: int) -> None:
        """Permanently delete a document visible to actor."""
        self.get_document(actor, document_id)
        self.db.delete_document(document_id)
        logger.info("Document %s deleted by user %s", document_id, actor.id)

    def status_counts(self, actor: Actor) -> dict[DocumentStatus, int]:
        """Count visible documents per status."""
        return self.db.count_documents_by_status(owner_id=self.policy.owner_filter(actor))

    def describe(self, documents: Iterable[DocumentEntity]) -> list[DocumentDetail]:
        """Attach category, letter type and user names to documents.

        Looks up each kind of referenced record once for the whole batch.
        """
        documents = list(documents)
        categories = self.db.get_categories_by_ids(d.category_id for d in documents)
        letter_types = self.db.get_letter_types_by_ids(d.letter_type_id for d in documents)
        user_ids = {d.created_by for d in documents}
        user_ids.update(d.approved_by for d in documents if d.approved_by is not None)
        users = self.db.get_users_by_ids(user_ids)

        details = []
        for doc in documents:
            category = categories.get(doc.category_id)
            letter_type = letter_types.get(doc.letter_type_id)
            creator = users.get(doc.created_by)
            approver_name = None
            if doc.approved_by is not None:
                approver = users.get(doc.approved_by)
                approver_name = approver.name if approver else "Unknown"
            details.append(
                DocumentDetail(
                    document=doc,
                    category_name=category.name if category else "Unknown",
                    category_prefix=category.prefix if category else "",
                    letter_type_name=letter_type.name if letter_type else "Unknown",
                    created_by_name=creator.name if creator else "Unknown",
                    approved_by_name=approver_name,
                )
            )
        return details

    def _resolve_references(self, category_id: int, letter_type_id: int) -> tuple[Category, LetterType]:
        category = self.category_service.require_category(category_id, active_only=True)
        letter_type = self.letter_type_service.require_letter_type(letter_type_id, active_only=True)
        if letter_type.category_id != category.id:
            raise ValidationError(
                f"Letter type '{letter_type.name}' does not belong to category '{category.name}'"
            )
        return category, letter_type

    @staticmethod
    def _required_text(value: Optional[str], label: str, problems: list[str]) -> str:
        value = "" if value is None else str(value).strip()
        if not value:
            problems.append(f"{label} is required")
        return value

    def _issue_date(self, value: "date | str | None", problems: list[str]) -> Optional[date]:
        if value is None or (isinstance(value, str) and not value.strip()):
            problems.append("Issue date is required")
            return None
        try:
            parsed = coerce_date(value)
        except ValueError:
            problems.append("Invalid issue date format")
            return None
        if parsed > self.clock().date():
            problems.append("Issue date cannot be in the future")
        return parsed
