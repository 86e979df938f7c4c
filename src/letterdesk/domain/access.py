"""Access policy: who may read and mutate which records."""

from typing import Optional

from letterdesk.domain.entities import Actor, Document, DocumentStatus
from letterdesk.domain.errors import AuthorizationError, admin_required


# Staff may edit their own documents only until a decision has been made
STAFF_EDITABLE_STATUSES = frozenset({DocumentStatus.DRAFT, DocumentStatus.PENDING})


class AccessPolicy:
    """Role and ownership checks shared by the domain services.

    Administrators see and mutate everything. Staff only see documents they
    created; the owner filter returned by :meth:`owner_filter` is intersected
    with every document lookup, so a foreign document looks exactly like a
    missing one.
    """

    def owner_filter(self, actor: Actor) -> Optional[int]:
        """Return the created_by value to restrict lookups to, or None for admins."""
        if actor.is_admin:
            return None
        return actor.id

    def require_admin(self, actor: Optional[Actor]) -> None:
        """Raise AuthorizationError unless actor is an administrator."""
        if actor is None or not actor.is_admin:
            raise AuthorizationError(admin_required())

    def can_read(self, actor: Actor, document: Document) -> bool:
        return actor.is_admin or document.created_by == actor.id

    def require_editable(self, actor: Actor, document: Document) -> None:
        """Check that actor may change the content fields of document.

        Raises:
            AuthorizationError: If a staff member edits a decided document
        """
        if actor.is_admin:
            return
        if document.status not in STAFF_EDITABLE_STATUSES:
            raise AuthorizationError(
                f"Document {document.id} is {document.status.value} and can no longer be edited"
            )
