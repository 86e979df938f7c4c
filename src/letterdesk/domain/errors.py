"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``code`` is a stable
    identifier callers can branch on without parsing the message.
    """

    code = "domain"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``errors`` lists every field problem found, so a caller can correct all
    of them at once.
    """

    code = "validation"

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is not visible to the actor."""

    code = "not_found"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    code = "conflict"


class AuthorizationError(DomainError):
    """Actor lacks the role or ownership required for the operation."""

    code = "forbidden"


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""

    code = "dependency"


class StorageError(DomainError):
    """Persistence layer unavailable or failed in an unclassified way."""

    code = "storage"


def document_not_found(document_id: int) -> str:
    """Return message for missing (or invisible) document."""
    return f"Document {document_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def letter_type_not_found(letter_type_id: int) -> str:
    """Return message for missing letter type by ID."""
    return f"Letter type {letter_type_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user by ID."""
    return f"User {user_id} not found"


def duplicate_letter_number(letter_number: str) -> str:
    """Return message for duplicate letter number."""
    return f"Letter number '{letter_number}' already exists"


def admin_required() -> str:
    """Return the generic denial for administrator-only operations."""
    return "This operation requires an administrator"


def storage_unavailable() -> str:
    """Return the generic message for storage failures."""
    return "Document store is unavailable, please try again later"


def user_delete_blocked(user_id: int, document_count: int) -> str:
    """Return message when documents still reference a user."""
    return (
        f"Cannot delete user {user_id}: they created or approved "
        f"{document_count} document{'s' if document_count != 1 else ''}. "
        "Please delete or reassign them first."
    )
