"""Utilities for resolving user-typed names to record IDs."""

from typing import Optional

from letterdesk.domain.category import CategoryService
from letterdesk.domain.errors import NotFoundError
from letterdesk.domain.letter_type import LetterTypeService
from letterdesk.domain.user import UserService


def _as_id(value: str | int) -> Optional[int]:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def resolve_user(user_service: UserService, user: str | int) -> int:
    """Resolve user email or ID to user ID.

    Raises:
        NotFoundError: If user is not found
    """
    user_id = _as_id(user)
    if user_id is not None:
        if user_service.get_user(user_id) is None:
            raise NotFoundError(f"User ID {user_id} not found")
        return user_id

    found = user_service.get_user_by_email(str(user))
    if found is None:
        raise NotFoundError(f"User '{user}' not found")
    return found.id


def resolve_category(category_service: CategoryService, category: str | int) -> int:
    """Resolve category name or ID to category ID.

    Names match active categories only, ignoring case.

    Raises:
        NotFoundError: If category is not found
    """
    category_id = _as_id(category)
    if category_id is not None:
        category_service.require_category(category_id)
        return category_id

    found = category_service.find_by_name(str(category))
    if found is None:
        raise NotFoundError(f"Category '{category}' not found")
    return found.id


def resolve_letter_type(
    letter_type_service: LetterTypeService, letter_type: str | int, category_id: Optional[int] = None
) -> int:
    """Resolve letter type name or ID to letter type ID.

    Args:
        letter_type_service: LetterTypeService instance
        letter_type: Letter type name or ID
        category_id: Restrict name matches to this category

    Raises:
        NotFoundError: If letter type is not found
    """
    letter_type_id = _as_id(letter_type)
    if letter_type_id is not None:
        letter_type_service.require_letter_type(letter_type_id)
        return letter_type_id

    found = letter_type_service.find_by_name(str(letter_type), category_id=category_id)
    if found is None:
        raise NotFoundError(f"Letter type '{letter_type}' not found")
    return found.id
