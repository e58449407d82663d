"""Unit tests for the console report."""

import io

from job_tracker.analysis.statistics import JobStatistics
from job_tracker.export.console import print_recent_applications, print_statistics
from job_tracker.models.enums import JobStatus


class TestPrintStatistics:
    """Test the statistics summary."""

    def test_empty(self):
        out = io.StringIO()
        print_statistics(JobStatistics.from_applications([]), out=out)

        assert "No job-related emails found" in out.getvalue()

    def test_zero_buckets_omitted(self, make_application):
        out = io.StringIO()
        stats = JobStatistics.from_applications([
            make_application("Acme", JobStatus.OFFER),
            make_application("Acme", JobStatus.OFFER),
            make_application("Globex", JobStatus.REJECTED),
        ])

        print_statistics(stats, out=out)
        text = out.getvalue()

        assert "Found 3 job-related emails" in text
        assert f"{JobStatus.OFFER.display_name}: 2" in text
        assert f"{JobStatus.REJECTED.display_name}: 1" in text
        assert JobStatus.WITHDRAWN.display_name not in text
        assert "Companies: 2" in text
        assert "Acme: 2" in text

    def test_sparse_counts(self):
        out = io.StringIO()
        print_statistics(JobStatistics(total=1, status_counts={JobStatus.OFFER: 1}), out=out)

        assert f"{JobStatus.OFFER.display_name}: 1" in out.getvalue()
        assert JobStatus.APPLIED.display_name not in out.getvalue()

    def test_console_top_n(self, make_application):
        out = io.StringIO()
        stats = JobStatistics.from_applications(make_application(f"Co{i}") for i in range(8))

        print_statistics(stats, console_top_n=5, out=out)
        text = out.getvalue()

        assert "Co4: 1" in text
        assert "Co5: 1" not in text


class TestPrintRecentApplications:
    """Test the recent activity list."""

    def test_limit_and_remainder(self, make_application):
        out = io.StringIO()
        applications = [make_application(f"Co{i}", index=i) for i in range(1, 8)]

        print_recent_applications(applications, limit=5, out=out)
        lines = out.getvalue().strip().splitlines()

        assert lines[1] == "• Co1 - Software Engineer (Applied) [03-02]"
        assert sum(line.startswith("•") for line in lines) == 5
        assert lines[-1] == "... 2 more, see the CSV file for details"

    def test_no_remainder_line(self, make_application):
        out = io.StringIO()
        print_recent_applications([make_application()], out=out)

        assert "more" not in out.getvalue()

    def test_nothing_printed_without_applications(self):
        out = io.StringIO()
        print_recent_applications([], out=out)

        assert out.getvalue() == ""
