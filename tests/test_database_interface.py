"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime

from sqlalchemy.exc import OperationalError

from letterdesk.database.factories import create_sqlite_database
from letterdesk.domain import entities
from letterdesk.domain.errors import ConflictError, NotFoundError, StorageError


def _document_fields(category_id, letter_type_id, created_by, **overrides):
    fields = dict(
        title="Appointment of Clerk",
        category_id=category_id,
        letter_type_id=letter_type_id,
        letter_number="OFF/2025/001",
        reference_number="REF/OFF/032025/01",
        issue_date=date(2025, 3, 5),
        content="Body",
        status=entities.DocumentStatus.DRAFT,
        created_by=created_by,
    )
    fields.update(overrides)
    return fields


@pytest.fixture
def seeded(temp_db):
    """Insert one user, category and letter type directly through the database."""
    user_id = temp_db.create_user(name="Admin User", email="Admin@Demo.com", role=entities.Role.ADMIN)
    category_id = temp_db.create_category(name="Official Letters", prefix="OFF")
    letter_type_id = temp_db.create_letter_type(name="Appointment Letter", category_id=category_id)
    return user_id, category_id, letter_type_id


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db, seeded):
        """Test that get_user returns a domain User entity with a lowercased email."""
        user = temp_db.get_user(seeded[0])

        assert isinstance(user, entities.User)
        assert user.email == "admin@demo.com"
        assert user.role is entities.Role.ADMIN
        assert isinstance(user.created_at, datetime)
        assert temp_db.get_user_by_email("ADMIN@demo.com").id == user.id

    def test_duplicate_email_is_conflict(self, temp_db, seeded):
        with pytest.raises(ConflictError):
            temp_db.create_user(name="Copy", email="admin@demo.com", role=entities.Role.STAFF)

    def test_create_and_get_document(self, temp_db, seeded):
        user_id, category_id, letter_type_id = seeded
        document_id = temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))

        document = temp_db.get_document(document_id)
        assert isinstance(document, entities.Document)
        assert document.status is entities.DocumentStatus.DRAFT
        assert document.issue_date == date(2025, 3, 5)
        assert temp_db.get_document_by_letter_number("OFF/2025/001").id == document_id

    def test_get_document_with_owner_filter(self, temp_db, seeded):
        user_id, category_id, letter_type_id = seeded
        document_id = temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))

        assert temp_db.get_document(document_id, owner_id=user_id) is not None
        assert temp_db.get_document(document_id, owner_id=user_id + 1) is None

    def test_duplicate_letter_number_is_conflict(self, temp_db, seeded):
        """The unique constraint is the final word on letter numbers."""
        user_id, category_id, letter_type_id = seeded
        temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))

        with pytest.raises(ConflictError, match="OFF/2025/001"):
            temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))

        # The session is still usable afterwards
        assert len(temp_db.list_documents()) == 1

    def test_letter_number_exists(self, temp_db, seeded):
        user_id, category_id, letter_type_id = seeded
        document_id = temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))

        assert temp_db.letter_number_exists("OFF/2025/001")
        assert not temp_db.letter_number_exists("OFF/2025/001", exclude_id=document_id)
        assert not temp_db.letter_number_exists("OFF/2025/002")

    def test_update_document_status(self, temp_db, seeded):
        user_id, category_id, letter_type_id = seeded
        document_id = temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))
        approved_at = datetime(2025, 3, 6, 9, 0)

        temp_db.update_document_status(
            document_id,
            status=entities.DocumentStatus.APPROVED,
            approved_by=user_id,
            approved_at=approved_at,
            rejection_reason=None,
        )

        document = temp_db.get_document(document_id)
        assert document.status is entities.DocumentStatus.APPROVED
        assert document.approved_at == approved_at

    def test_count_documents_by_status(self, temp_db, seeded):
        user_id, category_id, letter_type_id = seeded
        temp_db.create_document(**_document_fields(category_id, letter_type_id, user_id))
        temp_db.create_document(
            **_document_fields(
                category_id,
                letter_type_id,
                user_id,
                letter_number="OFF/2025/002",
                status=entities.DocumentStatus.PENDING,
            )
        )

        counts = temp_db.count_documents_by_status()
        assert counts[entities.DocumentStatus.DRAFT] == 1
        assert counts[entities.DocumentStatus.PENDING] == 1
        assert counts[entities.DocumentStatus.REJECTED] == 0
        assert temp_db.get_user_document_count(user_id) == 2

    def test_batched_lookups(self, temp_db, seeded):
        user_id, category_id, letter_type_id = seeded
        assert set(temp_db.get_users_by_ids([user_id, 999])) == {user_id}
        assert temp_db.get_categories_by_ids([category_id])[category_id].prefix == "OFF"
        assert temp_db.get_letter_types_by_ids([]) == {}

    def test_missing_records(self, temp_db):
        assert temp_db.get_document(1) is None
        with pytest.raises(NotFoundError):
            temp_db.delete_document(1)
        with pytest.raises(NotFoundError):
            temp_db.update_category(1, name="Nope")

    def test_driver_failure_becomes_storage_error(self, temp_db, monkeypatch):
        session = temp_db._get_session()

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "query", broken_query)
        with pytest.raises(StorageError):
            temp_db.list_users()

        # A fresh session is used for the next call
        assert temp_db.list_users() == []


def test_database_path_from_environment(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("LETTERDESK_DB_PATH", str(db_path))
    db = create_sqlite_database()
    assert db.database_url == f"sqlite:///{db_path}"
