"""Category domain service."""

import logging
import re
from typing import Optional

from letterdesk.database.base import Database
from letterdesk.domain.access import AccessPolicy
from letterdesk.domain.entities import Actor, Category as CategoryEntity
from letterdesk.domain.errors import NotFoundError, ValidationError, category_not_found

logger = logging.getLogger(__name__)

# Prefixes end up inside slash-separated letter numbers
PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,16}$")


def validate_prefix(prefix: str) -> str:
    """Return the stripped prefix or raise ValidationError."""
    prefix = (prefix or "").strip()
    if not PREFIX_PATTERN.match(prefix):
        raise ValidationError(
            f"Invalid prefix '{prefix}': use 1-16 letters, digits or '-'"
        )
    return prefix


class CategoryService:
    """Service for managing document categories."""

    def __init__(self, db: Database, policy: Optional[AccessPolicy] = None):
        """Initialize category service.

        Args:
            db: Database instance
            policy: Access policy (defaults to the standard one)
        """
        self.db = db
        self.policy = policy or AccessPolicy()

    def create_category(
        self, actor: Actor, name: str, prefix: str, description: Optional[str] = None
    ) -> CategoryEntity:
        """Create a category.

        Args:
            actor: Acting administrator
            name: Category name
            prefix: Short code used in generated letter numbers (e.g. "OFF")
            description: Optional description

        Returns:
            The created category

        Raises:
            AuthorizationError: If actor is not an administrator
            ValidationError: If name is empty or prefix is malformed
        """
        self.policy.require_admin(actor)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        prefix = validate_prefix(prefix)

        category_id = self.db.create_category(name=name, prefix=prefix, description=description)
        logger.info("Category %s '%s' created by user %s", category_id, name, actor.id)
        return self.require_category(category_id)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID (active or not)."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int, active_only: bool = False) -> CategoryEntity:
        """Get category by ID or raise NotFoundError.

        Args:
            category_id: Category ID
            active_only: Treat deactivated categories as missing
        """
        category = self.db.get_category(category_id)
        if category is None or (active_only and not category.is_active):
            raise NotFoundError(category_not_found(category_id))
        return category

    def find_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Find an active category by name, ignoring case."""
        wanted = name.strip().lower()
        for category in self.db.list_categories():
            if category.name.lower() == wanted:
                return category
        return None

    def list_categories(self, include_inactive: bool = False) -> list[CategoryEntity]:
        """List categories, active ones only unless include_inactive."""
        return self.db.list_categories(include_inactive=include_inactive)

    def update_category(
        self,
        actor: Actor,
        category_id: int,
        name: Optional[str] = None,
        prefix: Optional[str] = None,
        description: Optional[str] = None,
    ) -> CategoryEntity:
        """Update a category. Existing documents keep their numbers."""
        self.policy.require_admin(actor)
        self.require_category(category_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Category name is required")
        if prefix is not None:
            prefix = validate_prefix(prefix)

        self.db.update_category(category_id, name=name, prefix=prefix, description=description)
        logger.info("Category %s updated by user %s", category_id, actor.id)
        return self.require_category(category_id)

    def deactivate_category(self, actor: Actor, category_id: int) -> None:
        """Soft-delete a category.

        Documents that reference it are untouched; it just disappears from
        the active lists and cannot be chosen for new documents.
        """
        self.policy.require_admin(actor)
        self.require_category(category_id)
        self.db.update_category(category_id, is_active=False)
        logger.info("Category %s deactivated by user %s", category_id, actor.id)
