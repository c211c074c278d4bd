"""
Input rules shared by the forms and the API.

These are the only checks made before a request leaves the client: a minimum
contract length, an email shape, and PDF admission (type and size).
"""

import re
from typing import Optional

MIN_CONTRACT_LENGTH = 100
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MB
PDF_MEDIA_TYPE = "application/pdf"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    """True when ``value`` has a ``local@domain.tld`` shape."""
    return bool(EMAIL_PATTERN.match(value))


def contract_text_error(text: str) -> Optional[str]:
    """
    Validate pasted or extracted contract text.

    Returns:
        None when the text may advance, otherwise the message to show.
    """
    if len(text.strip()) < MIN_CONTRACT_LENGTH:
        return f"Please enter at least {MIN_CONTRACT_LENGTH} characters of contract text"
    return None


def email_error(value: str) -> Optional[str]:
    """
    Validate an email address typed at the capture step.

    Returns:
        None when valid, otherwise the message to show.
    """
    if not value.strip():
        return "Please enter your email address"
    if not is_valid_email(value):
        return "Please enter a valid email address"
    return None


def upload_error(content_type: Optional[str], size: int) -> Optional[str]:
    """
    Admission control for a PDF upload, checked before any bytes are sent.

    Returns:
        None when the file may be uploaded, otherwise the message to show.
    """
    if content_type != PDF_MEDIA_TYPE:
        return "Please upload a PDF file"
    if size > MAX_UPLOAD_BYTES:
        return "File size must be less than 10MB"
    return None
