"""
Lead capture.

The analysis flow records the submitter's email through ``LeadStore``. The
real owner of that data is an external mailing-list or CRM service; this
package only defines the seam and two local implementations.
"""

from typing import List, Protocol

import structlog

logger = structlog.get_logger()


class LeadStore(Protocol):
    """Anything that can record a captured email address."""

    async def record(self, email: str) -> None:
        ...


class LoggingLeadStore:
    """Default store: logs the capture and keeps nothing."""

    async def record(self, email: str) -> None:
        logger.info("email_captured", email=email)


class InMemoryLeadStore:
    """Keeps captured addresses in a list. For tests and local runs."""

    def __init__(self):
        self.emails: List[str] = []

    async def record(self, email: str) -> None:
        self.emails.append(email)
        logger.debug("email_captured", email=email, total=len(self.emails))
