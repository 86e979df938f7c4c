"""Tests for letter and reference number generation."""

import random
import re
from datetime import date

import pytest

from letterdesk.domain.errors import ConflictError
from letterdesk.domain.identifiers import (
    IdentifierService,
    generate_letter_number,
    generate_reference_number,
)


class FixedRandom(random.Random):
    """Random source that replays a fixed list of integers."""

    def __init__(self, values):
        super().__init__()
        self.values = list(values)

    def randint(self, a, b):
        return self.values.pop(0)


def test_letter_number_format():
    number = generate_letter_number("OFF", date(2025, 3, 5), random.Random(1))
    assert re.fullmatch(r"OFF/2025/\d{3}", number)


def test_letter_number_pads_suffix():
    assert generate_letter_number("CIR", date(2024, 1, 1), FixedRandom([7])) == "CIR/2024/007"


def test_reference_number_format():
    number = generate_reference_number("OFF", date(2025, 3, 5), random.Random(1))
    assert re.fullmatch(r"REF/OFF/032025/\d{2}", number)


def test_reference_number_pads_month_and_suffix():
    assert generate_reference_number("NOT", date(2025, 11, 30), FixedRandom([3])) == "REF/NOT/112025/03"


def test_next_letter_number_returns_free_number(temp_db, sample_category):
    service = IdentifierService(temp_db, rng=random.Random(5))
    number = service.next_letter_number(sample_category, date(2025, 3, 5))
    assert number.startswith("OFF/2025/")
    assert not temp_db.letter_number_exists(number)


def test_next_letter_number_retries_on_collision(temp_db, admin, make_document, sample_category):
    make_document(admin, letter_number="OFF/2025/001")
    make_document(admin, letter_number="OFF/2025/002")

    service = IdentifierService(temp_db, rng=FixedRandom([1, 2, 3]))
    assert service.next_letter_number(sample_category, date(2025, 3, 5)) == "OFF/2025/003"


def test_next_letter_number_gives_up_after_max_attempts(temp_db, admin, make_document, sample_category):
    make_document(admin, letter_number="OFF/2025/001")

    service = IdentifierService(temp_db, rng=FixedRandom([1, 1, 1]), max_attempts=3)
    with pytest.raises(ConflictError, match="after 3 attempts"):
        service.next_letter_number(sample_category, date(2025, 3, 5))


def test_max_attempts_must_be_positive(temp_db):
    with pytest.raises(ValueError):
        IdentifierService(temp_db, max_attempts=0)


def test_max_attempts_from_environment(temp_db, monkeypatch):
    monkeypatch.setenv("LETTERDESK_IDENTIFIER_ATTEMPTS", "4")
    assert IdentifierService(temp_db).max_attempts == 4


def test_max_attempts_default(temp_db, monkeypatch):
    monkeypatch.delenv("LETTERDESK_IDENTIFIER_ATTEMPTS", raising=False)
    assert IdentifierService(temp_db).max_attempts == 10
