"""
Tests for the operation boundary.
"""

import pytest

from eventdesk.core.errors import CapacityError, ErrorCode, NotFoundError, PersistenceError
from eventdesk.core.result import run_operation
from eventdesk.schemas import EventCreate


def test_success_carries_value():
    result = run_operation(lambda x: x * 2, 21)
    assert result.ok
    assert result.value == 42
    assert result.kind is None


def test_domain_error_becomes_result():
    def allocate():
        raise CapacityError("Not enough Chairs. Requested: 5, Available: 1")

    result = run_operation(allocate)

    assert not result.ok
    assert result.kind is ErrorCode.CAPACITY
    assert result.error.message.startswith("Not enough Chairs")


def test_not_found_message():
    def lookup():
        raise NotFoundError("Event", 7)

    result = run_operation(lookup)
    assert result.kind is ErrorCode.NOT_FOUND
    assert result.error.message == "Event 7 not found"
    assert str(result.error) == "NOT_FOUND: Event 7 not found"


def test_schema_error_becomes_validation_result():
    result = run_operation(EventCreate, name="Meetup", date="2026-13-01", time="10:00")
    assert result.kind is ErrorCode.VALIDATION
    assert result.error.message.startswith("date:")


def test_persistence_error_propagates():
    def save():
        raise PersistenceError("data/users.txt", "Permission denied")

    with pytest.raises(PersistenceError):
        run_operation(save)
