"""
Statistics over a batch of JobApplications.

JobStatistics is an immutable value folded from the outcome sequence;
nothing is accumulated in module state.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from job_tracker.models.application_models import JobApplication
from job_tracker.models.enums import JobStatus


class JobStatistics(BaseModel):
    """
    Per-status and per-company tallies.

    ``status_counts`` always holds all JobStatus values (zero-filled) in
    enum order. ``company_counts`` skips empty company names and keeps the
    order in which companies first appeared; top_companies() relies on it to
    break ties deterministically.
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0, description="Number of applications")
    status_counts: dict[JobStatus, int] = Field(default_factory=dict)
    company_counts: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_applications(cls, applications: Iterable[JobApplication]) -> "JobStatistics":
        status_counts = {status: 0 for status in JobStatus}
        company_counts: dict[str, int] = {}
        total = 0

        for application in applications:
            total += 1
            status_counts[application.status] += 1
            if application.company:
                company_counts[application.company] = company_counts.get(application.company, 0) + 1

        return cls(total=total, status_counts=status_counts, company_counts=company_counts)

    @property
    def company_total(self) -> int:
        """Number of distinct non-empty company names."""
        return len(self.company_counts)

    def count_for(self, status: JobStatus) -> int:
        """Applications with ``status``; 0 for a status never seen."""
        return self.status_counts.get(status, 0)

    def top_companies(self, n: int) -> list[tuple[str, int]]:
        """
        Companies ranked by descending count, at most ``n`` of them.

        Equal counts keep first-appearance order (sorted() is stable).
        """
        ranked = sorted(self.company_counts.items(), key=lambda item: item[1], reverse=True)
        return ranked[:max(n, 0)]
