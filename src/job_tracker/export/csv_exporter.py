"""
CSV export of classification outcomes and statistics.

Both writers use the csv module with QUOTE_MINIMAL: a value is quoted
only when it contains the delimiter, a quote or a newline.
"""

import csv
from pathlib import Path
from typing import Sequence, Union

import structlog

from job_tracker.analysis.statistics import JobStatistics
from job_tracker.models.application_models import JobApplication
from job_tracker.models.enums import JobStatus

logger = structlog.get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

APPLICATION_HEADER = [
    "Company",
    "Position",
    "Status",
    "Location",
    "Description",
    "Sender",
    "Subject",
    "Email Date",
    "Folder",
    "Extracted At",
]


def application_row(application: JobApplication) -> list[str]:
    return [
        application.company,
        application.position,
        application.status.value,
        application.location,
        application.description,
        application.email.sender,
        application.email.subject,
        application.email.date.strftime(TIMESTAMP_FORMAT),
        application.email.folder,
        application.extracted_at.strftime(TIMESTAMP_FORMAT),
    ]


class CSVExporter:
    """
    Writes the applications file and, separately, the statistics file.

    Files are overwritten. Rows keep the pipeline output order.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def export_applications(self, applications: Sequence[JobApplication]) -> Path:
        """
        Write one header row plus one row per application.

        Raises:
            OSError: If the file cannot be written
        """
        with self.path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)
            writer.writerow(APPLICATION_HEADER)
            writer.writerows(application_row(application) for application in applications)

        logger.info("Applications exported", path=str(self.path), rows=len(applications))
        return self.path

    def export_statistics(
        self,
        statistics: JobStatistics,
        path: Union[str, Path],
        top_n: int = 10,
    ) -> Path:
        """
        Write the statistics file: status table, blank row, top companies.

        Every status is listed, zero counts included, in enum order.

        Raises:
            OSError: If the file cannot be written
        """
        path = Path(path)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)

            writer.writerow(["Status Statistics"])
            writer.writerow(["Status", "Count"])
            for status in JobStatus:
                writer.writerow([status.value, statistics.count_for(status)])

            writer.writerow([])

            writer.writerow([f"Top {top_n} Companies"])
            writer.writerow(["Company", "Applications"])
            writer.writerows(statistics.top_companies(top_n))

        logger.info("Statistics exported", path=str(path))
        return path
