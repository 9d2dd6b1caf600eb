"""
Logging setup for the booking console.

Student phone numbers and e-mail addresses end up in log messages when a
store call fails, so every configured logger masks them before output.
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+")
_PHONE_RE = re.compile(r"(?<!\d)\+?\d{7,15}(?!\d)")


def mask_email(email: str) -> str:
    """
    Keep the first letter of a student e-mail and its domain.

    Examples:
        >>> mask_email("sara@example.com")
        's***@example.com'
        >>> mask_email("no-at-sign")
        '***'
    """
    local, at, domain = (email or "").partition("@")
    if not at:
        return "***"
    return f"{local[:1]}***@{domain}"


def mask_phone(phone: str) -> str:
    """
    Keep only the last two digits of a phone number.

    Examples:
        >>> mask_phone("0551234567")
        '********67'
    """
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) <= 2:
        return "***"
    return "*" * (len(digits) - 2) + digits[-2:]


class ContactDataFilter(logging.Filter):
    """Masks e-mail addresses and phone numbers in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        message = _EMAIL_RE.sub(lambda m: mask_email(m.group(0)), message)
        message = _PHONE_RE.sub(lambda m: mask_phone(m.group(0)), message)
        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "session_booking",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "session_booking")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers on Streamlit reruns
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    contact_filter = ContactDataFilter()
    for handler in logger.handlers:
        handler.addFilter(contact_filter)

    return logger
