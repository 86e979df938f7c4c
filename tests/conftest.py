"""Shared pytest fixtures for letterdesk tests."""

import os
import random
import tempfile
from datetime import datetime

import pytest

from letterdesk.database.factories import create_sqlite_database
from letterdesk.domain.category import CategoryService
from letterdesk.domain.document import DocumentService
from letterdesk.domain.entities import Actor, Role
from letterdesk.domain.identifiers import IdentifierService
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.domain.user import UserService
from letterdesk.domain.verification import VerificationService
from letterdesk.domain.workflow import WorkflowService

# SQLite hands datetimes back without tzinfo, so the test clock is naive too
FIXED_NOW = datetime(2025, 3, 5, 10, 30)


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def letter_type_service(temp_db):
    return LetterTypeService(temp_db)


@pytest.fixture
def identifier_service(temp_db):
    """IdentifierService with a seeded random source."""
    return IdentifierService(temp_db, rng=random.Random(42))


@pytest.fixture
def document_service(temp_db, identifier_service):
    """DocumentService whose clock is fixed at FIXED_NOW."""
    return DocumentService(temp_db, identifiers=identifier_service, clock=fixed_clock)


@pytest.fixture
def workflow_service(temp_db):
    return WorkflowService(temp_db, clock=fixed_clock)


@pytest.fixture
def verification_service(temp_db):
    return VerificationService(temp_db)


@pytest.fixture
def admin_user(user_service):
    """The first user, who is always an administrator."""
    return user_service.create_user(None, name="Admin User", email="admin@demo.com")


@pytest.fixture
def admin(admin_user):
    return Actor.from_user(admin_user)


@pytest.fixture
def staff_user(user_service, admin):
    return user_service.create_user(admin, name="Priya Staff", email="priya@demo.com", role=Role.STAFF)


@pytest.fixture
def staff(staff_user):
    return Actor.from_user(staff_user)


@pytest.fixture
def other_staff(user_service, admin):
    user = user_service.create_user(admin, name="Ravi Staff", email="ravi@demo.com", role=Role.STAFF)
    return Actor.from_user(user)


@pytest.fixture
def sample_category(category_service, admin):
    return category_service.create_category(
        admin, name="Official Letters", prefix="OFF", description="Official government correspondence"
    )


@pytest.fixture
def sample_letter_type(letter_type_service, admin, sample_category):
    return letter_type_service.create_letter_type(
        admin, name="Appointment Letter", category_id=sample_category.id
    )


@pytest.fixture
def other_category(category_service, admin):
    return category_service.create_category(admin, name="Circulars", prefix="CIR")


@pytest.fixture
def other_letter_type(letter_type_service, admin, other_category):
    return letter_type_service.create_letter_type(
        admin, name="Policy Circular", category_id=other_category.id
    )


@pytest.fixture
def make_document(document_service, sample_category, sample_letter_type):
    """Factory creating documents with sensible defaults."""

    def _make(actor, **overrides):
        fields = {
            "title": "Appointment of Clerk",
            "category_id": sample_category.id,
            "letter_type_id": sample_letter_type.id,
            "issue_date": "2025-03-05",
            "content": "You are hereby appointed.",
        }
        fields.update(overrides)
        return document_service.create_document(actor, **fields)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
