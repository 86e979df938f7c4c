"""Public document verification.

Anyone holding a letter may check it against the register. Lookups never
require an actor and never raise for a missing or mismatched document; only
storage failures propagate.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from letterdesk.database.base import Database
from letterdesk.domain.entities import Document
from letterdesk.utils.date_parser import coerce_date, format_issue_date

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"
MISMATCH = "mismatch"
INVALID_DATE = "invalid_date"

REASON_MESSAGES = {
    NOT_FOUND: "Document not found",
    MISMATCH: "Document details do not match our records",
    INVALID_DATE: "Date of issue could not be understood",
}


@dataclass(frozen=True)
class DocumentSummary:
    """The public view of a verified document."""

    title: str
    letter_number: str
    reference_number: str
    issue_date: str
    category: str
    letter_type: str
    status: str


@dataclass(frozen=True)
class Verified:
    summary: DocumentSummary

    @property
    def is_verified(self) -> bool:
        return True


@dataclass(frozen=True)
class NotVerified:
    reason: str

    @property
    def is_verified(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return REASON_MESSAGES.get(self.reason, self.reason)


VerificationResult = Union[Verified, NotVerified]


class VerificationService:
    """Read-only lookup of documents by their public identifiers."""

    def __init__(self, db: Database):
        self.db = db

    def verify_letter_number(self, letter_number: str) -> VerificationResult:
        """Verify a document by letter number alone."""
        document = self._find(letter_number)
        if document is None:
            return NotVerified(NOT_FOUND)
        return Verified(self._summarize(document))

    def verify(
        self, letter_number: str, reference_number: str, issue_date: "date | str"
    ) -> VerificationResult:
        """Verify a document by letter number, reference number and date of issue.

        All three must agree with the register. Dates are compared in their
        printed ``DD Month YYYY`` form, as they appear on the letter.
        """
        document = self._find(letter_number)
        if document is None:
            return NotVerified(NOT_FOUND)

        try:
            supplied_date = format_issue_date(coerce_date(issue_date))
        except ValueError:
            return NotVerified(INVALID_DATE)

        if (reference_number or "").strip() != document.reference_number:
            logger.debug("Reference number mismatch for %s", document.letter_number)
            return NotVerified(MISMATCH)
        if supplied_date != format_issue_date(document.issue_date):
            logger.debug("Issue date mismatch for %s", document.letter_number)
            return NotVerified(MISMATCH)
        return Verified(self._summarize(document))

    def _find(self, letter_number: Optional[str]) -> Optional[Document]:
        letter_number = (letter_number or "").strip()
        if not letter_number:
            return None
        return self.db.get_document_by_letter_number(letter_number)

    def _summarize(self, document: Document) -> DocumentSummary:
        category = self.db.get_category(document.category_id)
        letter_type = self.db.get_letter_type(document.letter_type_id)
        return DocumentSummary(
            title=document.title,
            letter_number=document.letter_number,
            reference_number=document.reference_number,
            issue_date=format_issue_date(document.issue_date),
            category=category.name if category else "Unknown",
            letter_type=letter_type.name if letter_type else "Unknown",
            status=document.status.value,
        )
