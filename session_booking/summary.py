"""Read-only statistics over the current session list."""

from dataclasses import dataclass
from typing import Dict, Iterable, Sequence

from .models import Session, SessionStatus, Student
from .timevalue import format_duration


@dataclass(frozen=True)
class SessionSummary:
    total: int
    by_status: Dict[SessionStatus, int]
    total_minutes: int
    student_count: int = 0

    @property
    def total_duration_label(self) -> str:
        return format_duration(self.total_minutes)

    def count(self, status: SessionStatus) -> int:
        return self.by_status.get(status, 0)


def summarize(sessions: Sequence[Session], students: Iterable[Student] = ()) -> SessionSummary:
    by_status = {status: 0 for status in SessionStatus}
    total_minutes = 0
    for session in sessions:
        by_status[status_of(session)] += 1
        total_minutes += session.duration or 0
    return SessionSummary(
        total=len(sessions),
        by_status=by_status,
        total_minutes=total_minutes,
        student_count=sum(1 for _ in students),
    )


def status_of(session: Session) -> SessionStatus:
    return SessionStatus.for_display(session.status)


def sessions_for_student(sessions: Iterable[Session], student_id: str) -> int:
    return sum(1 for s in sessions if s.student_id == student_id)
