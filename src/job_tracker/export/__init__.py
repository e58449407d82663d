"""
Output of a run: CSV files and the console report.
"""

from job_tracker.export.console import print_recent_applications, print_statistics
from job_tracker.export.csv_exporter import APPLICATION_HEADER, CSVExporter

__all__ = [
    "CSVExporter",
    "APPLICATION_HEADER",
    "print_statistics",
    "print_recent_applications",
]
