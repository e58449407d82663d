"""
Enumerations for JobTracker data models.

JobStatus is a closed taxonomy - no values outside this set are permitted
on a JobApplication.
"""

from enum import Enum


class JobStatus(str, Enum):
    """
    Application progress extracted from a job-related email.

    Single-label: each JobApplication carries exactly one status.
    OTHER is the fallback for any label that cannot be recognized.
    """

    APPLIED = "Applied"
    ONLINE_ASSESSMENT = "OnlineAssessment"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        """Human-readable label used in console and statistics output."""
        return _DISPLAY_NAMES[self]

    @property
    def prompt_description(self) -> str:
        """Short explanation of the status, embedded in the detail prompt."""
        return _PROMPT_DESCRIPTIONS[self]


_DISPLAY_NAMES = {
    JobStatus.APPLIED: "Applied",
    JobStatus.ONLINE_ASSESSMENT: "Online assessment / written test",
    JobStatus.INTERVIEW: "Interview",
    JobStatus.OFFER: "Offer received",
    JobStatus.REJECTED: "Rejected",
    JobStatus.WITHDRAWN: "Withdrawn",
    JobStatus.OTHER: "Other",
}

_PROMPT_DESCRIPTIONS = {
    JobStatus.APPLIED: "application submitted / resume received",
    JobStatus.ONLINE_ASSESSMENT: "online assessment or written test invitation",
    JobStatus.INTERVIEW: "interview invitation or interview scheduling",
    JobStatus.OFFER: "offer or hiring notice received",
    JobStatus.REJECTED: "rejected / did not pass",
    JobStatus.WITHDRAWN: "application withdrawn",
    JobStatus.OTHER: "any other status",
}
