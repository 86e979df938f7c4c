"""Tests for domain entities."""

import pytest
from datetime import datetime, UTC

from letterdesk.domain.entities import Actor, Category, DocumentStatus, Role, User


class TestDocumentStatus:
    @pytest.mark.parametrize("raw", ["Draft", "draft", " DRAFT ", DocumentStatus.DRAFT])
    def test_parse(self, raw):
        assert DocumentStatus.parse(raw) is DocumentStatus.DRAFT

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Invalid status"):
            DocumentStatus.parse("Archived")

    def test_values(self):
        assert [s.value for s in DocumentStatus] == ["Draft", "Pending", "Approved", "Rejected"]


class TestActor:
    def test_from_user(self):
        user = User(
            id=4,
            name="Priya Staff",
            email="priya@demo.com",
            role=Role.STAFF,
            is_active=True,
            created_at=datetime.now(UTC),
        )
        actor = Actor.from_user(user)
        assert actor == Actor(id=4, role=Role.STAFF)
        assert not actor.is_admin

    def test_admin(self):
        assert Actor(id=1, role=Role.ADMIN).is_admin


class TestCategory:
    def test_category_immutability(self):
        """Test that Category entities are immutable."""
        category = Category(
            id=1,
            name="Official Letters",
            prefix="OFF",
            description=None,
            is_active=True,
            created_at=datetime.now(UTC),
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            category.prefix = "NEW"
