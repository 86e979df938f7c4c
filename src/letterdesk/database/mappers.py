"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so status and role strings stored
in the database are turned into enums in exactly one place.
"""

from letterdesk.domain import entities as domain
from letterdesk.database.models import (
    User as ORMUser,
    Category as ORMCategory,
    LetterType as ORMLetterType,
    Document as ORMDocument,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        role=domain.Role(orm_user.role),
        is_active=orm_user.is_active,
        created_at=orm_user.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        prefix=orm_category.prefix,
        description=orm_category.description,
        is_active=orm_category.is_active,
        created_at=orm_category.created_at,
    )


def letter_type_to_domain(orm_letter_type: ORMLetterType) -> domain.LetterType:
    """Convert SQLAlchemy LetterType model to domain LetterType entity."""
    return domain.LetterType(
        id=orm_letter_type.id,
        name=orm_letter_type.name,
        category_id=orm_letter_type.category_id,
        description=orm_letter_type.description,
        is_active=orm_letter_type.is_active,
        created_at=orm_letter_type.created_at,
    )


def document_to_domain(orm_document: ORMDocument) -> domain.Document:
    """Convert SQLAlchemy Document model to domain Document entity."""
    return domain.Document(
        id=orm_document.id,
        title=orm_document.title,
        category_id=orm_document.category_id,
        letter_type_id=orm_document.letter_type_id,
        letter_number=orm_document.letter_number,
        reference_number=orm_document.reference_number,
        issue_date=orm_document.issue_date,
        content=orm_document.content,
        status=domain.DocumentStatus(orm_document.status),
        created_by=orm_document.created_by,
        approved_by=orm_document.approved_by,
        approved_at=orm_document.approved_at,
        rejection_reason=orm_document.rejection_reason,
        created_at=orm_document.created_at,
        updated_at=orm_document.updated_at,
    )
