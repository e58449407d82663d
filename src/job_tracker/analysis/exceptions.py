"""
Analysis pipeline exceptions.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from job_tracker.models.application_models import JobApplication


class AnalysisCancelledError(Exception):
    """
    Raised when a batch stops early (explicit cancel or deadline).

    Partial results are never discarded: ``applications`` holds every
    JobApplication extracted before the batch stopped, in input order.

    Attributes:
        reason: "cancelled" or "deadline_exceeded"
        applications: Outcomes accumulated so far
        processed: Number of emails consumed before stopping
    """

    def __init__(
        self,
        reason: str,
        applications: list["JobApplication"],
        processed: int,
    ) -> None:
        self.reason = reason
        self.applications = applications
        self.processed = processed

        super().__init__(
            f"Analysis stopped ({reason}) after {processed} emails "
            f"with {len(applications)} job applications extracted"
        )
