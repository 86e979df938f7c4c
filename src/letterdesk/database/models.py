"""SQLAlchemy models for letterdesk database."""

from datetime import datetime, UTC
from typing import Any

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    role = Column(String, nullable=False, default="staff")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    documents = relationship("Document", back_populates="creator", foreign_keys="Document.created_by")


class Category(Base):
    """Document category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    prefix = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    letter_types = relationship("LetterType", back_populates="category")
    documents = relationship("Document", back_populates="category")


class LetterType(Base):
    """Letter type model."""

    __tablename__ = "letter_types"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="letter_types")
    documents = relationship("Document", back_populates="letter_type")


class Document(Base):
    """Issued or draft letter model."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    letter_type_id = Column(Integer, ForeignKey("letter_types.id"), nullable=False)
    # The unique index is what actually guarantees letter numbers are unique
    letter_number = Column(String, unique=True, nullable=False)
    reference_number = Column(String, nullable=False)
    issue_date = Column(Date, nullable=False)
    content = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="Draft")
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="documents")
    letter_type = relationship("LetterType", back_populates="documents")
    creator = relationship("User", back_populates="documents", foreign_keys=[created_by])


def create_session_factory(database_url: str, timeout: float = 15.0) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    Args:
        database_url: SQLAlchemy database URL
        timeout: Seconds a SQLite connection waits on a locked database
    """
    engine_kwargs: dict[str, Any] = {"echo": False}
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"timeout": timeout}
    else:
        engine_kwargs["pool_pre_ping"] = True
    engine = create_engine(database_url, **engine_kwargs)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
