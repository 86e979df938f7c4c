"""Letter and reference number generation.

Letter numbers look like ``OFF/2025/042`` and reference numbers like
``REF/OFF/032025/07``. The random suffix is small, so generated letter
numbers collide; :class:`IdentifierService` retries against the document
store a bounded number of times before giving up.
"""

import logging
import random
from datetime import date
from typing import Optional

from letterdesk.config import load_settings
from letterdesk.database.base import Database
from letterdesk.domain.entities import Category
from letterdesk.domain.errors import ConflictError

logger = logging.getLogger(__name__)


def generate_letter_number(prefix: str, on: date, rng: Optional[random.Random] = None) -> str:
    """Return ``{prefix}/{YYYY}/{NNN}`` with NNN drawn uniformly from 000-999."""
    rng = rng or random
    return f"{prefix}/{on.year:04d}/{rng.randint(0, 999):03d}"


def generate_reference_number(prefix: str, on: date, rng: Optional[random.Random] = None) -> str:
    """Return ``REF/{prefix}/{MM}{YYYY}/{NN}`` with NN drawn uniformly from 00-99."""
    rng = rng or random
    return f"REF/{prefix}/{on.month:02d}{on.year:04d}/{rng.randint(0, 99):02d}"


class IdentifierService:
    """Service producing identifiers that are free in the document store."""

    def __init__(
        self,
        db: Database,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
    ):
        """Initialize identifier service.

        Args:
            db: Database instance
            rng: Random source (seed it in tests for repeatable numbers)
            max_attempts: How many candidates to try before raising ConflictError
                (defaults to LETTERDESK_IDENTIFIER_ATTEMPTS, 10 when unset)
        """
        if max_attempts is None:
            max_attempts = load_settings().identifier_attempts
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.db = db
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def next_letter_number(self, category: Category, on: date) -> str:
        """Generate a letter number not yet used by any document.

        The store's unique constraint still has the final word: a concurrent
        writer can take the number between this check and the insert.

        Raises:
            ConflictError: If every attempt produced a taken number
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = generate_letter_number(category.prefix, on, self.rng)
            if not self.db.letter_number_exists(candidate):
                return candidate
            logger.debug("Letter number %s taken (attempt %d)", candidate, attempt)
        logger.warning(
            "Could not find a free letter number for prefix %s after %d attempts",
            category.prefix,
            self.max_attempts,
        )
        raise ConflictError(
            f"Could not generate a free letter number for '{category.prefix}' "
            f"after {self.max_attempts} attempts; please supply one"
        )

    def next_reference_number(self, category: Category, on: date) -> str:
        """Generate a reference number (uniqueness is not required)."""
        return generate_reference_number(category.prefix, on, self.rng)
