"""Email capture step."""

from typing import Optional

from ..models.schemas import EmailLead
from ..utils.validation import email_error


class EmailCaptureForm:
    """Validates the address before analysis is requested."""

    def __init__(self, email: str = ""):
        self.email = email
        self.error: Optional[str] = None

    def set_email(self, value: str) -> None:
        self.email = value
        self.error = None

    def submit(self, value: Optional[str] = None) -> Optional[EmailLead]:
        """
        Validate ``value`` (or the current field) as an email address.

        Returns:
            EmailLead, or None with ``error`` set
        """
        if value is not None:
            self.email = value
        self.error = None

        message = email_error(self.email)
        if message:
            self.error = message
            return None
        return EmailLead(address=self.email)
