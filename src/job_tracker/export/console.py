"""
Console report printed at the end of a run.
"""

import sys
from typing import Sequence, TextIO

from job_tracker.analysis.statistics import JobStatistics
from job_tracker.models.application_models import JobApplication
from job_tracker.models.enums import JobStatus


def print_statistics(statistics: JobStatistics, console_top_n: int = 5, out: TextIO = sys.stdout) -> None:
    """Status distribution (non-zero buckets only), company count and top companies."""
    if statistics.total == 0:
        print("No job-related emails found", file=out)
        return

    print("\n=== Job Email Statistics ===", file=out)
    print(f"Found {statistics.total} job-related emails\n", file=out)

    print("Status distribution:", file=out)
    for status in JobStatus:
        count = statistics.count_for(status)
        if count:
            print(f"  {status.display_name}: {count}", file=out)

    print(f"\nCompanies: {statistics.company_total}", file=out)

    top = statistics.top_companies(console_top_n)
    if top:
        print("\nMost applied companies:", file=out)
        for company, count in top:
            print(f"  {company}: {count}", file=out)


def print_recent_applications(
    applications: Sequence[JobApplication],
    limit: int = 5,
    out: TextIO = sys.stdout,
) -> None:
    """The first ``limit`` outcomes as one line each, plus a remainder note."""
    if not applications:
        return

    print("\nRecent job activity:", file=out)
    for application in applications[:limit]:
        print(
            f"• {application.company} - {application.position} "
            f"({application.status.value}) [{application.email.date.strftime('%m-%d')}]",
            file=out,
        )

    remaining = len(applications) - limit
    if remaining > 0:
        print(f"... {remaining} more, see the CSV file for details", file=out)
