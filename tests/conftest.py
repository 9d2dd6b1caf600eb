"""
Shared fixtures: an in-memory store, a small roster and a signed-in identity.
"""

import itertools

import pytest

from session_booking.auth import Identity
from session_booking.errors import StorePersistFailure
from session_booking.models import Session, SessionStatus, Student
from session_booking.popovers import (
    CALENDAR,
    END_TIME,
    START_TIME,
    STUDENT_SEARCH,
    KeyRegion,
    PopoverCoordinator,
)


class InMemoryWriter:
    """Records every write; ``fail_with`` makes the next calls fail."""

    def __init__(self):
        self.documents = {}
        self.calls = []
        self.fail = False
        self._ids = itertools.count(1)

    def _maybe_fail(self, operation, collection):
        if self.fail:
            raise StorePersistFailure(operation, collection)

    def create(self, collection, record):
        self.calls.append(("create", collection, record))
        self._maybe_fail("create", collection)
        doc_id = f"{collection}-{next(self._ids)}"
        self.documents[(collection, doc_id)] = dict(record)
        return doc_id

    def update(self, collection, doc_id, record):
        self.calls.append(("update", collection, doc_id, record))
        self._maybe_fail("update", collection)
        self.documents[(collection, doc_id)] = dict(record)

    def delete(self, collection, doc_id):
        self.calls.append(("delete", collection, doc_id))
        self._maybe_fail("delete", collection)
        self.documents.pop((collection, doc_id), None)


@pytest.fixture
def writer():
    return InMemoryWriter()


@pytest.fixture
def roster():
    return (
        Student("st1", "Sara Ahmed", "0551234567", "sara@example.com"),
        Student("st2", "Omar Hassan", "0667654321", "omar@example.com"),
        Student("st3", "سارة خالد", "0771112233", "s.khaled@example.com"),
    )


@pytest.fixture
def identity():
    return Identity(uid="staff-1", method="token")


@pytest.fixture
def popovers():
    coordinator = PopoverCoordinator()
    for name in (CALENDAR, START_TIME, END_TIME, STUDENT_SEARCH):
        coordinator.register(name, KeyRegion(f"{name}:"))
    return coordinator


@pytest.fixture
def stored_session():
    return Session(
        id="s1",
        date="2024-03-10",
        start_time="10:00",
        end_time="11:00",
        lecturer="د. أحمد علي",
        student_id="st1",
        subject="Algebra",
        status=SessionStatus.parse("scheduled"),
        duration=60,
        student_name="Sara Ahmed",
        student_phone="0551234567",
        student_email="sara@example.com",
        updated_at="2024-03-01T09:00:00+00:00",
    )
