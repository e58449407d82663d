"""
Monitoring: Prometheus metrics for batch runs.
"""

from job_tracker.monitoring.metrics import (
    applications_by_status_total,
    emails_analyzed_total,
    llm_latency_seconds,
    registry,
    response_parse_failures_total,
    write_metrics_textfile,
)

__all__ = [
    "applications_by_status_total",
    "emails_analyzed_total",
    "llm_latency_seconds",
    "registry",
    "response_parse_failures_total",
    "write_metrics_textfile",
]
