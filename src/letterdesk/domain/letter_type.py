"""Letter type domain service."""

import logging
from typing import Optional

from letterdesk.database.base import Database
from letterdesk.domain.access import AccessPolicy
from letterdesk.domain.category import CategoryService
from letterdesk.domain.entities import Actor, LetterType as LetterTypeEntity
from letterdesk.domain.errors import NotFoundError, ValidationError, letter_type_not_found

logger = logging.getLogger(__name__)


class LetterTypeService:
    """Service for managing letter types within categories."""

    def __init__(self, db: Database, policy: Optional[AccessPolicy] = None):
        self.db = db
        self.policy = policy or AccessPolicy()
        self.category_service = CategoryService(db, self.policy)

    def create_letter_type(
        self, actor: Actor, name: str, category_id: int, description: Optional[str] = None
    ) -> LetterTypeEntity:
        """Create a letter type under an active category.

        Raises:
            AuthorizationError: If actor is not an administrator
            ValidationError: If name is empty
            NotFoundError: If the category is missing or deactivated
        """
        self.policy.require_admin(actor)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Letter type name is required")
        self.category_service.require_category(category_id, active_only=True)

        letter_type_id = self.db.create_letter_type(
            name=name, category_id=category_id, description=description
        )
        logger.info(
            "Letter type %s '%s' created in category %s by user %s",
            letter_type_id,
            name,
            category_id,
            actor.id,
        )
        return self.require_letter_type(letter_type_id)

    def get_letter_type(self, letter_type_id: int) -> Optional[LetterTypeEntity]:
        return self.db.get_letter_type(letter_type_id)

    def require_letter_type(self, letter_type_id: int, active_only: bool = False) -> LetterTypeEntity:
        letter_type = self.db.get_letter_type(letter_type_id)
        if letter_type is None or (active_only and not letter_type.is_active):
            raise NotFoundError(letter_type_not_found(letter_type_id))
        return letter_type

    def find_by_name(self, name: str, category_id: Optional[int] = None) -> Optional[LetterTypeEntity]:
        """Find an active letter type by name, ignoring case."""
        wanted = name.strip().lower()
        for letter_type in self.db.list_letter_types(category_id=category_id):
            if letter_type.name.lower() == wanted:
                return letter_type
        return None

    def list_letter_types(
        self, category_id: Optional[int] = None, include_inactive: bool = False
    ) -> list[LetterTypeEntity]:
        return self.db.list_letter_types(category_id=category_id, include_inactive=include_inactive)

    def update_letter_type(
        self,
        actor: Actor,
        letter_type_id: int,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> LetterTypeEntity:
        """Update a letter type; moving it requires an active target category."""
        self.policy.require_admin(actor)
        self.require_letter_type(letter_type_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Letter type name is required")
        if category_id is not None:
            self.category_service.require_category(category_id, active_only=True)

        self.db.update_letter_type(
            letter_type_id, name=name, category_id=category_id, description=description
        )
        logger.info("Letter type %s updated by user %s", letter_type_id, actor.id)
        return self.require_letter_type(letter_type_id)

    def deactivate_letter_type(self, actor: Actor, letter_type_id: int) -> None:
        """Soft-delete a letter type."""
        self.policy.require_admin(actor)
        self.require_letter_type(letter_type_id)
        self.db.update_letter_type(letter_type_id, is_active=False)
        logger.info("Letter type %s deactivated by user %s", letter_type_id, actor.id)
