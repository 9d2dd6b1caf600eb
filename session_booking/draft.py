"""
The booking form's draft: field values, create-vs-edit mode and submission.

A draft is either being created from a blank template or editing a loaded
session; the mode is a tagged union (``Creating`` / ``Editing``) rather than
a flag plus a nullable id.  Submission validates in a fixed order, writes
through a ``DocumentWriter`` and resets the draft only once the store call
returned.
"""

import logging
from dataclasses import dataclass, fields as dataclass_fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Sequence, Union

from .errors import InvalidTimeRange, NotReady, StorePersistFailure, StudentNotFound
from .models import SESSIONS, DocumentWriter, Session, SessionStatus, Student
from .popovers import CALENDAR, STUDENT_SEARCH, PopoverCoordinator
from .students import find_student
from .timevalue import duration


logger = logging.getLogger(__name__)

CREATED_MESSAGE = "تم حجز الحصة بنجاح"
UPDATED_MESSAGE = "تم تحديث الحصة بنجاح"


@dataclass(frozen=True)
class Creating:
    pass


@dataclass(frozen=True)
class Editing:
    session_id: str


DraftMode = Union[Creating, Editing]


class DraftState(Enum):
    EMPTY = "empty"
    IN_PROGRESS = "in-progress"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class DraftFields:
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    lecturer: str = ""
    student_id: str = ""
    subject: str = ""
    status: SessionStatus = SessionStatus.SCHEDULED

    @classmethod
    def from_session(cls, session: Session) -> "DraftFields":
        return cls(
            date=session.date,
            start_time=session.start_time,
            end_time=session.end_time,
            lecturer=session.lecturer,
            student_id=session.student_id,
            subject=session.subject,
            status=session.status,
        )


FIELD_NAMES = frozenset(f.name for f in dataclass_fields(DraftFields))


@dataclass(frozen=True)
class SubmitResult:
    session_id: str
    created: bool

    @property
    def message(self) -> str:
        return CREATED_MESSAGE if self.created else UPDATED_MESSAGE


class BookingDraft:
    """
    In-progress booking form.

    ``popovers`` is the form's coordinator; choosing a date or a student
    also closes the popover the choice was made in.
    """

    def __init__(self, popovers: Optional[PopoverCoordinator] = None):
        self.popovers = popovers
        self._fields = DraftFields()
        self._mode: DraftMode = Creating()
        self._submitting = False

    @property
    def fields(self) -> DraftFields:
        return self._fields

    @property
    def mode(self) -> DraftMode:
        return self._mode

    @property
    def is_editing(self) -> bool:
        return isinstance(self._mode, Editing)

    @property
    def edit_id(self) -> Optional[str]:
        return self._mode.session_id if isinstance(self._mode, Editing) else None

    @property
    def state(self) -> DraftState:
        if self._submitting:
            return DraftState.SUBMITTING
        if not self.is_editing and self._fields == DraftFields():
            return DraftState.EMPTY
        return DraftState.IN_PROGRESS

    @property
    def duration(self) -> int:
        """Current interval in minutes, 0 while unset or invalid."""
        try:
            return duration(self._fields.start_time, self._fields.end_time)
        except ValueError:
            return 0

    def load_for_edit(self, session: Session) -> None:
        if not session.id:
            raise ValueError("Only stored sessions can be edited")
        self._fields = DraftFields.from_session(session)
        self._mode = Editing(session.id)
        logger.debug("Loaded session %s for editing", session.id)

    def update(self, **changes) -> None:
        """Replace the named fields, leaving every other field as it is."""
        unknown = set(changes) - FIELD_NAMES
        if unknown:
            raise ValueError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        if "status" in changes:
            changes["status"] = SessionStatus.parse(changes["status"])
        self._fields = replace(self._fields, **changes)

    def set_status(self, status: Union[SessionStatus, str]) -> None:
        self.update(status=status)

    def select_date(self, value: str) -> None:
        self.update(date=value)
        if self.popovers is not None:
            self.popovers.close(CALENDAR)

    def select_student(self, student_id: str) -> None:
        self.update(student_id=student_id)
        if self.popovers is not None:
            self.popovers.close(STUDENT_SEARCH)

    def reset(self) -> None:
        self._fields = DraftFields()
        self._mode = Creating()

    def cancel_edit(self) -> None:
        self.reset()

    def build_session(
        self, student: Student, minutes: int, now: Optional[datetime] = None
    ) -> Session:
        """Persistable session for the current fields."""
        now = now or datetime.now(timezone.utc)
        f = self._fields
        return Session(
            id=self.edit_id,
            date=f.date,
            start_time=f.start_time,
            end_time=f.end_time,
            lecturer=f.lecturer,
            student_id=f.student_id,
            subject=f.subject,
            status=f.status,
            duration=minutes,
            student_name=student.name,
            student_phone=student.phone,
            student_email=student.email,
            updated_at=now.isoformat(),
        )

    def validate(self, roster: Sequence[Student], identity) -> Student:
        """
        Check the draft can be submitted; returns the selected student.

        Raises:
            NotReady: No identity yet, or a submission is in flight
            InvalidTimeRange: End time not strictly after start time
            StudentNotFound: Student id not in ``roster``
        """
        if identity is None or self._submitting:
            raise NotReady()
        if self.duration <= 0:
            raise InvalidTimeRange(self._fields.start_time, self._fields.end_time)
        student = find_student(roster, self._fields.student_id)
        if student is None:
            raise StudentNotFound(self._fields.student_id)
        return student

    def submit(
        self,
        writer: DocumentWriter,
        roster: Sequence[Student],
        identity,
        now: Optional[datetime] = None,
    ) -> SubmitResult:
        """
        Validate and persist the draft, then reset it.

        On ``StorePersistFailure`` the draft keeps every field so the user
        can retry.
        """
        student = self.validate(roster, identity)
        session = self.build_session(student, self.duration, now)
        record = session.to_document()
        mode = self._mode

        self._submitting = True
        try:
            if isinstance(mode, Editing):
                writer.update(SESSIONS, mode.session_id, record)
                session_id = mode.session_id
            else:
                session_id = writer.create(SESSIONS, record)
        except StorePersistFailure as e:
            logger.error("Saving session failed: %s", e.details)
            raise
        finally:
            self._submitting = False

        self.reset()
        created = isinstance(mode, Creating)
        logger.info("%s session %s", "Created" if created else "Updated", session_id)
        return SubmitResult(session_id=session_id, created=created)
