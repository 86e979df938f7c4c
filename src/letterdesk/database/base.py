"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from letterdesk.domain.entities import (
    Category,
    Document,
    DocumentStatus,
    LetterType,
    Role,
    User,
)


class Database(ABC):
    """Abstract database interface for letterdesk.

    Implementations must enforce uniqueness of ``letter_number`` at the
    storage level and report violations as ``ConflictError``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, name: str, email: str, role: Role) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        pass

    @abstractmethod
    def list_users(self, role: Optional[Role] = None) -> list[User]:
        """List users, optionally filtered by role."""
        pass

    @abstractmethod
    def get_users_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        """Fetch several users at once, keyed by ID."""
        pass

    @abstractmethod
    def count_users(self) -> int:
        """Count all users."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, prefix: str, description: Optional[str] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID, active or not."""
        pass

    @abstractmethod
    def list_categories(self, include_inactive: bool = False) -> list[Category]:
        """List categories ordered by name."""
        pass

    @abstractmethod
    def get_categories_by_ids(self, category_ids: Iterable[int]) -> dict[int, Category]:
        """Fetch several categories at once, keyed by ID."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        prefix: Optional[str] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update category fields that are not None."""
        pass

    # Letter type operations
    @abstractmethod
    def create_letter_type(self, name: str, category_id: int, description: Optional[str] = None) -> int:
        """Create a letter type. Returns letter type ID."""
        pass

    @abstractmethod
    def get_letter_type(self, letter_type_id: int) -> Optional[LetterType]:
        """Get letter type by ID, active or not."""
        pass

    @abstractmethod
    def list_letter_types(
        self, category_id: Optional[int] = None, include_inactive: bool = False
    ) -> list[LetterType]:
        """List letter types ordered by name, optionally filtered by category."""
        pass

    @abstractmethod
    def get_letter_types_by_ids(self, letter_type_ids: Iterable[int]) -> dict[int, LetterType]:
        """Fetch several letter types at once, keyed by ID."""
        pass

    @abstractmethod
    def update_letter_type(
        self,
        letter_type_id: int,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update letter type fields that are not None."""
        pass

    # Document operations
    @abstractmethod
    def create_document(
        self,
        title: str,
        category_id: int,
        letter_type_id: int,
        letter_number: str,
        reference_number: str,
        issue_date: date,
        content: str,
        status: DocumentStatus,
        created_by: int,
    ) -> int:
        """Create a document. Returns document ID.

        Raises:
            ConflictError: If the letter number is already taken
        """
        pass

    @abstractmethod
    def get_document(self, document_id: int, owner_id: Optional[int] = None) -> Optional[Document]:
        """Get document by ID.

        Args:
            document_id: Document ID
            owner_id: If given, only return the document when it was created by this user
        """
        pass

    @abstractmethod
    def get_document_by_letter_number(self, letter_number: str) -> Optional[Document]:
        """Get document by exact letter number."""
        pass

    @abstractmethod
    def letter_number_exists(self, letter_number: str, exclude_id: Optional[int] = None) -> bool:
        """Check if a letter number is taken, optionally ignoring one document."""
        pass

    @abstractmethod
    def list_documents(
        self,
        owner_id: Optional[int] = None,
        status: Optional[DocumentStatus] = None,
        category_id: Optional[int] = None,
    ) -> list[Document]:
        """List documents newest first with optional filters.

        Args:
            owner_id: Only documents created by this user
            status: Only documents with this status
            category_id: Only documents in this category
        """
        pass

    @abstractmethod
    def update_document(
        self,
        document_id: int,
        title: Optional[str] = None,
        category_id: Optional[int] = None,
        letter_type_id: Optional[int] = None,
        letter_number: Optional[str] = None,
        reference_number: Optional[str] = None,
        issue_date: Optional[date] = None,
        content: Optional[str] = None,
    ) -> None:
        """Update editable document fields that are not None.

        Raises:
            ConflictError: If the new letter number is already taken
        """
        pass

    @abstractmethod
    def update_document_status(
        self,
        document_id: int,
        status: DocumentStatus,
        approved_by: Optional[int],
        approved_at: Optional[datetime],
        rejection_reason: Optional[str],
    ) -> None:
        """Write status and the workflow fields together, exactly as given."""
        pass

    @abstractmethod
    def delete_document(self, document_id: int) -> None:
        """Delete a document."""
        pass

    @abstractmethod
    def count_documents_by_status(self, owner_id: Optional[int] = None) -> dict[DocumentStatus, int]:
        """Count documents per status; every status is present in the result."""
        pass

    @abstractmethod
    def get_user_document_count(self, user_id: int) -> int:
        """Count documents created or approved by a user."""
        pass
