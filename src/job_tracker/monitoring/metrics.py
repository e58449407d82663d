"""Prometheus metrics for JobTracker.

JobTracker is a batch CLI, so nothing is scraped live: the metrics live
on a dedicated registry and are dumped with write_metrics_textfile() at the
end of a run, for the node-exporter textfile collector.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, write_to_textfile

registry = CollectorRegistry()

# === Pipeline Metrics ===

emails_analyzed_total = Counter(
    "jobtracker_emails_analyzed_total",
    "Emails processed by the classification pipeline, by outcome",
    ["outcome"],
    registry=registry,
)
"""
Labels:
- outcome: relevant, irrelevant, skipped_relevance, skipped_detail
"""

applications_by_status_total = Counter(
    "jobtracker_applications_by_status_total",
    "Extracted job applications by normalized status",
    ["status"],
    registry=registry,
)

response_parse_failures_total = Counter(
    "jobtracker_response_parse_failures_total",
    "LLM responses that could not be decoded into job details",
    ["error_type"],
    registry=registry,
)
"""
Labels:
- error_type: json_decode_error, not_json_object, schema_error
"""

# === LLM Metrics ===

llm_latency_seconds = Histogram(
    "jobtracker_llm_latency_seconds",
    "Chat-completion latency in seconds",
    ["model", "success"],
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
    registry=registry,
)


def write_metrics_textfile(path: str) -> None:
    """Write the current metric values in Prometheus text format."""
    write_to_textfile(path, registry)
