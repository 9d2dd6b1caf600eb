"""
Error kinds surfaced by the booking console.

Every error carries a user-facing message (Arabic, the console's only
locale), a stable ``error_code`` and optional ``details``.  None of them is
fatal: the UI shows the message and the form stays editable.
"""

from typing import Optional, Dict, Any

from .models import SESSIONS, STUDENTS


RETRY_HINT = "الرجاء المحاولة مرة أخرى."

# (operation, collection) -> message shown when the store rejects the call
PERSIST_MESSAGES = {
    ("create", SESSIONS): f"حدث خطأ أثناء حفظ الحصة. {RETRY_HINT}",
    ("update", SESSIONS): f"حدث خطأ أثناء حفظ الحصة. {RETRY_HINT}",
    ("create", STUDENTS): f"حدث خطأ أثناء إضافة الطالب. {RETRY_HINT}",
    ("delete", SESSIONS): "حدث خطأ أثناء حذف الحصة",
    ("delete", STUDENTS): "حدث خطأ أثناء حذف الطالب",
}


class BookingError(Exception):
    """Base error of the booking console"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class NotReady(BookingError):
    """Identity not established yet; submission is blocked, not queued"""

    def __init__(self, message: str = "الرجاء الانتظار حتى يتم التحميل..."):
        super().__init__(message, "NOT_READY")


class InvalidTimeRange(BookingError):
    """End time is not strictly after start time"""

    def __init__(self, start_time: str, end_time: str):
        super().__init__(
            "وقت النهاية يجب أن يكون بعد وقت البداية",
            "INVALID_TIME_RANGE",
            {"start_time": start_time, "end_time": end_time},
        )


class StudentNotFound(BookingError):
    """The draft's student id does not resolve in the roster"""

    def __init__(self, student_id: Optional[str]):
        super().__init__(
            "يرجى اختيار طالب",
            "STUDENT_NOT_FOUND",
            {"student_id": student_id},
        )


class StorePersistFailure(BookingError):
    """The store rejected a create, update or delete call"""

    def __init__(
        self,
        operation: str,
        collection: str,
        message: Optional[str] = None,
    ):
        super().__init__(
            message
            or PERSIST_MESSAGES.get((operation, collection), f"حدث خطأ أثناء الحفظ. {RETRY_HINT}"),
            "STORE_PERSIST_FAILURE",
            {"operation": operation, "collection": collection},
        )


class ValidationError(BookingError):
    """Form input failed validation"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class ConfigurationError(BookingError):
    """Configuration value is invalid or missing"""

    def __init__(self, parameter: str, message: str = None):
        message = (
            message or f"Configuration parameter '{parameter}' is invalid or missing"
        )
        super().__init__(message, "CONFIGURATION_ERROR", {"parameter": parameter})
