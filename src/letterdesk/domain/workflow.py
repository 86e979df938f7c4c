"""Document status workflow.

Draft -> Pending      submit (creator or administrator)
Pending -> Approved   approve (administrator; records approver and time)
Pending -> Rejected   reject (administrator; requires a reason)

Approved and Rejected are terminal. Every status change goes through
:meth:`WorkflowService.transition`.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from letterdesk.database.base import Database
from letterdesk.domain.access import AccessPolicy
from letterdesk.domain.document import DocumentService, utc_now
from letterdesk.domain.entities import Actor, Document, DocumentStatus
from letterdesk.domain.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    source: DocumentStatus
    target: DocumentStatus
    admin_only: bool


TRANSITIONS = {
    DocumentStatus.PENDING: Transition(DocumentStatus.DRAFT, DocumentStatus.PENDING, admin_only=False),
    DocumentStatus.APPROVED: Transition(DocumentStatus.PENDING, DocumentStatus.APPROVED, admin_only=True),
    DocumentStatus.REJECTED: Transition(DocumentStatus.PENDING, DocumentStatus.REJECTED, admin_only=True),
}


class WorkflowService:
    """Service applying status transitions to documents."""

    def __init__(
        self,
        db: Database,
        policy: Optional[AccessPolicy] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize workflow service.

        Args:
            db: Database instance
            policy: Access policy (defaults to the standard one)
            clock: Returns the current time, recorded as approved_at
        """
        self.db = db
        self.policy = policy or AccessPolicy()
        self.clock = clock
        self.documents = DocumentService(db, self.policy, clock=clock)

    def transition(
        self,
        actor: Actor,
        document_id: int,
        target: "DocumentStatus | str",
        rejection_reason: Optional[str] = None,
    ) -> Document:
        """Move a document to target status.

        Args:
            actor: Acting user
            document_id: Document ID
            target: Pending, Approved or Rejected
            rejection_reason: Required (non-blank) when target is Rejected

        Returns:
            The updated document

        Raises:
            ValidationError: Unknown target, missing reason, or document not in the source state
            AuthorizationError: Staff attempting to approve or reject
            NotFoundError: Document missing or not visible to actor
        """
        try:
            target = DocumentStatus.parse(target)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        rule = TRANSITIONS.get(target)
        if rule is None:
            raise ValidationError(f"Documents cannot be moved to {target.value}")

        if rule.admin_only:
            self.policy.require_admin(actor)
        if target == DocumentStatus.REJECTED and not (rejection_reason or "").strip():
            raise ValidationError("Rejection reason is required when rejecting a document")

        document = self.documents.get_document(actor, document_id)
        if document.status != rule.source:
            raise ValidationError(
                f"Document {document_id} is {document.status.value}; "
                f"only {rule.source.value} documents can become {target.value}"
            )

        approved_by = None
        approved_at = None
        reason = None
        if target == DocumentStatus.APPROVED:
            approved_by = actor.id
            approved_at = self.clock()
        elif target == DocumentStatus.REJECTED:
            reason = rejection_reason

        self.db.update_document_status(
            document_id,
            status=target,
            approved_by=approved_by,
            approved_at=approved_at,
            rejection_reason=reason,
        )
        logger.info(
            "Document %s moved %s -> %s by user %s",
            document_id,
            document.status.value,
            target.value,
            actor.id,
        )
        return self.documents.get_document(actor, document_id)

    def submit(self, actor: Actor, document_id: int) -> Document:
        """Submit a draft for review."""
        return self.transition(actor, document_id, DocumentStatus.PENDING)

    def approve(self, actor: Actor, document_id: int) -> Document:
        """Approve a pending document."""
        return self.transition(actor, document_id, DocumentStatus.APPROVED)

    def reject(self, actor: Actor, document_id: int, reason: str) -> Document:
        """Reject a pending document with a reason, stored verbatim."""
        return self.transition(actor, document_id, DocumentStatus.REJECTED, rejection_reason=reason)
