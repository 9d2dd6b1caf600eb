"""Roster search for the student dropdown."""

from typing import Iterator, Optional, Sequence

from .models import Student


def matches(student: Student, query: str) -> bool:
    """Name contains ``query`` ignoring case, or phone contains it verbatim."""
    if not query:
        return True
    if student.name and query.lower() in student.name.lower():
        return True
    return bool(student.phone) and query in student.phone


class StudentFilter:
    """
    Lazy view of the roster entries matching a query.

    Nothing is computed until iteration, and each iteration scans the
    roster again, so the view can be walked any number of times and always
    reflects the roster it was built over.

    Examples:
        >>> roster = [Student("a", "Sara", "0551"), Student("b", "Omar", "0662")]
        >>> [s.id for s in StudentFilter(roster, "sa")]
        ['a']
        >>> [s.id for s in StudentFilter(roster, "")]
        ['a', 'b']
    """

    def __init__(self, roster: Sequence[Student], query: str = ""):
        self.roster = roster
        self.query = query or ""

    def __iter__(self) -> Iterator[Student]:
        query = self.query
        return (student for student in self.roster if matches(student, query))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def with_query(self, query: str) -> "StudentFilter":
        return StudentFilter(self.roster, query)

    def __repr__(self) -> str:
        return f"StudentFilter(query={self.query!r}, roster_size={len(self.roster)})"


def filter_students(roster: Sequence[Student], query: str) -> StudentFilter:
    return StudentFilter(roster, query)


def find_student(roster: Sequence[Student], student_id: Optional[str]) -> Optional[Student]:
    if not student_id:
        return None
    return next((s for s in roster if s.id == student_id), None)
