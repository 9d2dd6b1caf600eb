"""
Package initialiser for the `session_booking` package.

Re-exports the pieces the Streamlit page wires together so it can do:

    from session_booking import BookingDraft, StoreGateway, establish
"""
from .auth import Identity, establish
from .calendar_engine import CalendarView, days_in_month, first_weekday_of_month, navigate
from .config import Config
from .draft import BookingDraft, DraftState, Editing, Creating, SubmitResult
from .errors import (
    BookingError,
    InvalidTimeRange,
    NotReady,
    StorePersistFailure,
    StudentNotFound,
    ValidationError,
)
from .logging_utils import setup_logger
from .models import Session, SessionStatus, Student
from .popovers import KeyRegion, PopoverCoordinator
from .roster import StudentForm, register_student
from .store import LiveCollections, StoreGateway, get_client
from .students import StudentFilter, filter_students
from .summary import SessionSummary, summarize
from .timevalue import duration, format_duration

__all__ = [
    "BookingDraft", "BookingError", "CalendarView", "Config", "Creating",
    "DraftState", "Editing", "Identity", "InvalidTimeRange", "KeyRegion",
    "LiveCollections", "NotReady", "PopoverCoordinator", "Session",
    "SessionStatus", "SessionSummary", "StoreGateway", "StorePersistFailure",
    "Student", "StudentFilter", "StudentForm", "StudentNotFound",
    "SubmitResult", "ValidationError", "days_in_month", "duration",
    "establish", "filter_students", "first_weekday_of_month",
    "format_duration", "get_client", "navigate", "register_student",
    "setup_logger", "summarize",
]
