"""
Email classification pipeline.

Components:
- JobAnalyzer: sequential relevance check + detail extraction
- CancellationToken: cooperative cancel flag and batch deadline
- JobStatistics: per-status and per-company tallies
- AnalysisCancelledError: early stop carrying partial results
"""

from job_tracker.analysis.analyzer import JobAnalyzer, is_affirmative
from job_tracker.analysis.cancellation import CancellationToken
from job_tracker.analysis.exceptions import AnalysisCancelledError
from job_tracker.analysis.statistics import JobStatistics

__all__ = [
    "JobAnalyzer",
    "is_affirmative",
    "CancellationToken",
    "AnalysisCancelledError",
    "JobStatistics",
]
