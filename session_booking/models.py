"""
Records held in the two store collections.

Documents use the camelCase field names of the existing ``sessions`` and
``students`` collections; the Python side uses snake_case attributes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol


SESSIONS = "sessions"
STUDENTS = "students"


LECTURERS = (
    "د. أحمد علي",
    "أ. سارة محمود",
    "د. محمد حسن",
    "أ. ليلى خالد",
)


class SessionStatus(str, Enum):
    """Stored status values of a session."""

    SCHEDULED = "مجدولة"
    COMPLETED = "منتهية"
    CANCELLED = "ملغية"

    @property
    def label(self) -> str:
        return f"حصة {self.value}"

    @classmethod
    def parse(cls, value: Any) -> "SessionStatus":
        """
        Accept a stored value, a member name or its lowercase English word.

        Raises:
            ValueError: If ``value`` names no status
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for status in cls:
                if value in (status.value, status.name, status.name.lower()):
                    return status
        raise ValueError(f"Unknown session status: {value!r}")

    @classmethod
    def for_display(cls, value: Any) -> "SessionStatus":
        """Like ``parse`` but unknown values show as scheduled."""
        try:
            return cls.parse(value)
        except ValueError:
            return cls.SCHEDULED


def _minutes(value: Any) -> int:
    """Stored duration as whole minutes; unreadable values count as 0."""
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class Student:
    id: str
    name: str = ""
    phone: str = ""
    email: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Student":
        return cls(
            id=doc_id,
            name=data.get("name") or "",
            phone=data.get("phone") or "",
            email=data.get("email") or "",
            created_at=data.get("createdAt"),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Session:
    """
    A scheduled or historical booking.

    ``duration`` is derived from the clock values at save time and the
    ``student_*`` fields are copies of the student taken at that moment.
    """

    id: Optional[str]
    date: str
    start_time: str
    end_time: str
    lecturer: str
    student_id: str
    subject: str = ""
    status: SessionStatus = SessionStatus.SCHEDULED
    duration: int = 0
    student_name: str = ""
    student_phone: str = ""
    student_email: str = ""
    updated_at: Optional[str] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Session":
        return cls(
            id=doc_id,
            date=data.get("date") or "",
            start_time=data.get("startTime") or "",
            end_time=data.get("endTime") or "",
            lecturer=data.get("lecturer") or "",
            student_id=data.get("studentId") or "",
            subject=data.get("subject") or "",
            status=SessionStatus.for_display(data.get("status")),
            duration=_minutes(data.get("duration")),
            student_name=data.get("studentName") or "",
            student_phone=data.get("studentPhone") or "",
            student_email=data.get("studentEmail") or "",
            updated_at=data.get("updatedAt"),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "lecturer": self.lecturer,
            "studentId": self.student_id,
            "subject": self.subject,
            "status": self.status.value,
            "duration": self.duration,
            "studentName": self.student_name,
            "studentPhone": self.student_phone,
            "studentEmail": self.student_email,
            "updatedAt": self.updated_at,
        }


class DocumentWriter(Protocol):
    """Outbound half of the store: the calls the core makes into it."""

    def create(self, collection: str, record: Dict[str, Any]) -> str:
        ...

    def update(self, collection: str, doc_id: str, record: Dict[str, Any]) -> None:
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        ...
