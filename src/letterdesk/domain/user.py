"""User directory service."""

import logging
import re
from typing import Optional

from letterdesk.database.base import Database
from letterdesk.domain.access import AccessPolicy
from letterdesk.domain.entities import Actor, Role, User as UserEntity
from letterdesk.domain.errors import (
    AuthorizationError,
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    user_delete_blocked,
    user_not_found,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserService:
    """Service for managing administrators and staff."""

    def __init__(self, db: Database, policy: Optional[AccessPolicy] = None):
        self.db = db
        self.policy = policy or AccessPolicy()

    def create_user(
        self, actor: Optional[Actor], name: str, email: str, role: Role = Role.STAFF
    ) -> UserEntity:
        """Create a user.

        The very first user may be created without an actor and is always
        an administrator; after that only administrators add users.

        Raises:
            AuthorizationError: If actor is not an administrator
            ValidationError: If name or email is malformed
            ConflictError: If the email is already registered
        """
        bootstrap = self.db.count_users() == 0
        if bootstrap:
            role = Role.ADMIN
        else:
            self.policy.require_admin(actor)

        name = (name or "").strip()
        email = (email or "").strip().lower()
        problems = []
        if not name:
            problems.append("Name is required")
        if not EMAIL_PATTERN.match(email):
            problems.append(f"Invalid email '{email}'")
        if problems:
            raise ValidationError("; ".join(problems), problems)

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(f"A user with email '{email}' already exists")

        user_id = self.db.create_user(name=name, email=email, role=Role(role))
        logger.info("User %s (%s) created with role %s", user_id, email, Role(role).value)
        return self.require_user(user_id)

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        return self.db.get_user(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserEntity]:
        return self.db.get_user_by_email(email)

    def require_user(self, user_id: int) -> UserEntity:
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def list_users(self, role: Optional[Role] = None) -> list[UserEntity]:
        return self.db.list_users(role=role)

    def list_staff(self) -> list[UserEntity]:
        return self.db.list_users(role=Role.STAFF)

    def delete_user(self, actor: Actor, user_id: int) -> None:
        """Delete a user.

        Raises:
            AuthorizationError: If actor is not an administrator, or deletes itself
            NotFoundError: If user does not exist
            DependencyError: If the user created or approved documents
        """
        self.policy.require_admin(actor)
        if actor.id == user_id:
            raise AuthorizationError("You cannot delete your own account")
        self.require_user(user_id)

        document_count = self.db.get_user_document_count(user_id)
        if document_count > 0:
            raise DependencyError(user_delete_blocked(user_id, document_count))

        self.db.delete_user(user_id)
        logger.info("User %s deleted by user %s", user_id, actor.id)
