"""Student registration and the delete actions of the two listings."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .errors import NotReady, ValidationError
from .models import SESSIONS, STUDENTS, DocumentWriter, Student


logger = logging.getLogger(__name__)

STUDENT_ADDED_MESSAGE = "تم إضافة الطالب بنجاح"
DELETE_SESSION_PROMPT = "هل أنت متأكد من حذف هذه الحصة؟"
DELETE_STUDENT_PROMPT = "هل أنت متأكد من حذف هذا الطالب؟"


@dataclass(frozen=True)
class StudentForm:
    name: str = ""
    phone: str = ""
    email: str = ""

    def cleaned(self) -> "StudentForm":
        return StudentForm(self.name.strip(), self.phone.strip(), self.email.strip())

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("يرجى إدخال اسم الطالب", {"field": "name"})
        if not self.phone.strip():
            raise ValidationError("يرجى إدخال رقم الهاتف", {"field": "phone"})
        if "@" not in self.email:
            raise ValidationError("البريد الإلكتروني غير صالح", {"field": "email"})


def register_student(
    writer: DocumentWriter,
    form: StudentForm,
    identity,
    now: Optional[datetime] = None,
) -> str:
    """
    Add a roster entry; returns its store id.

    Raises:
        NotReady: No identity yet
        ValidationError: Missing name or phone, missing or malformed e-mail
        StorePersistFailure: The store rejected the write
    """
    if identity is None:
        raise NotReady()
    form.validate()
    form = form.cleaned()
    now = now or datetime.now(timezone.utc)
    student = Student(
        id="", name=form.name, phone=form.phone, email=form.email,
        created_at=now.isoformat(),
    )
    student_id = writer.create(STUDENTS, student.to_document())
    logger.info("Registered student %s", student_id)
    return student_id


def delete_student(writer: DocumentWriter, student_id: str) -> None:
    # Sessions keep their copied student fields
    writer.delete(STUDENTS, student_id)
    logger.info("Deleted student %s", student_id)


def delete_session(writer: DocumentWriter, session_id: str) -> None:
    writer.delete(SESSIONS, session_id)
    logger.info("Deleted session %s", session_id)
