"""Domain model entities for letterdesk.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; SQLAlchemy
models stay inside the database package.
"""

from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import Optional


class DocumentStatus(str, Enum):
    """Lifecycle status of a document."""

    DRAFT = "Draft"
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: "str | DocumentStatus") -> "DocumentStatus":
        """Parse a status name case-insensitively.

        Raises:
            ValueError: If value is not a known status
        """
        if isinstance(value, cls):
            return value
        for status in cls:
            if status.value.lower() == str(value).strip().lower():
                return status
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Invalid status '{value}'. Valid statuses: {valid}")


class Role(str, Enum):
    """User role."""

    ADMIN = "admin"
    STAFF = "staff"


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    name: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing an operation."""

    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role)


@dataclass(frozen=True)
class Category:
    """Category domain entity; its prefix seeds generated identifiers."""

    id: int
    name: str
    prefix: str
    description: Optional[str]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class LetterType:
    """Letter type domain entity, owned by a category."""

    id: int
    name: str
    category_id: int
    description: Optional[str]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Document:
    """Document domain entity."""

    id: int
    title: str
    category_id: int
    letter_type_id: int
    letter_number: str
    reference_number: str
    issue_date: date
    content: str
    status: DocumentStatus
    created_by: int
    approved_by: Optional[int]
    approved_at: Optional[datetime]
    rejection_reason: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DocumentDetail:
    """Document together with the names of the records it references."""

    document: Document
    category_name: str
    category_prefix: str
    letter_type_name: str
    created_by_name: str
    approved_by_name: Optional[str]
