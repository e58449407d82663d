"""Unit tests for CSV export."""

import csv
from datetime import datetime

from job_tracker.analysis.statistics import JobStatistics
from job_tracker.export.csv_exporter import APPLICATION_HEADER, CSVExporter
from job_tracker.models.enums import JobStatus


def read_rows(path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestExportApplications:
    """Test the applications file."""

    def test_header_and_rows(self, tmp_path, make_application):
        path = tmp_path / "apps.csv"
        applications = [
            make_application("Acme", JobStatus.INTERVIEW, index=1),
            make_application("Globex", JobStatus.OFFER, index=2),
        ]

        CSVExporter(path).export_applications(applications)
        rows = read_rows(path)

        assert rows[0] == APPLICATION_HEADER
        assert len(rows[0]) == 10
        assert rows[1] == [
            "Acme",
            "Software Engineer",
            "Interview",
            "Remote",
            "Application received",
            "hr1@company1.com",
            "Email 1",
            "2026-03-02 09:00:00",
            "INBOX",
            "2026-03-10 12:00:00",
        ]
        assert rows[2][0] == "Globex"
        assert rows[2][2] == "Offer"

    def test_minimal_quoting(self, tmp_path, make_application):
        path = tmp_path / "apps.csv"
        application = make_application('Acme, "The" Company', description="line one\nline two")

        CSVExporter(path).export_applications([application])

        raw = path.read_text(encoding="utf-8")
        assert '"Acme, ""The"" Company"' in raw
        assert ",Software Engineer," in raw
        assert read_rows(path)[1][4] == "line one\nline two"

    def test_no_applications_writes_header_only(self, tmp_path):
        path = tmp_path / "apps.csv"
        CSVExporter(path).export_applications([])

        assert read_rows(path) == [APPLICATION_HEADER]

    def test_chinese_text_round_trips(self, tmp_path, make_application):
        path = tmp_path / "apps.csv"
        CSVExporter(path).export_applications([make_application("腾讯", position="后端开发")])

        assert read_rows(path)[1][:2] == ["腾讯", "后端开发"]


class TestExportStatistics:
    """Test the statistics file."""

    def test_layout(self, tmp_path, make_application):
        path = tmp_path / "stats.csv"
        stats = JobStatistics.from_applications([
            make_application("Acme", JobStatus.APPLIED),
            make_application("Acme", JobStatus.INTERVIEW),
            make_application("Globex", JobStatus.APPLIED),
        ])

        CSVExporter(tmp_path / "apps.csv").export_statistics(stats, path)
        rows = read_rows(path)

        assert rows[0] == ["Status Statistics"]
        assert rows[1] == ["Status", "Count"]
        assert rows[2:9] == [
            ["Applied", "2"],
            ["OnlineAssessment", "0"],
            ["Interview", "1"],
            ["Offer", "0"],
            ["Rejected", "0"],
            ["Withdrawn", "0"],
            ["Other", "0"],
        ]
        assert rows[9] == []
        assert rows[10] == ["Top 10 Companies"]
        assert rows[11] == ["Company", "Applications"]
        assert rows[12:] == [["Acme", "2"], ["Globex", "1"]]

    def test_top_n_limit(self, tmp_path, make_application):
        path = tmp_path / "stats.csv"
        stats = JobStatistics.from_applications(make_application(f"Co{i}") for i in range(15))

        CSVExporter(tmp_path / "apps.csv").export_statistics(stats, path, top_n=10)
        rows = read_rows(path)

        assert len(rows[12:]) == 10

    def test_sparse_counts_listed_in_enum_order(self, tmp_path):
        """Statuses missing from status_counts are written as zero."""
        path = tmp_path / "stats.csv"
        stats = JobStatistics(total=1, status_counts={JobStatus.OFFER: 1}, company_counts={"Acme": 1})

        CSVExporter(tmp_path / "apps.csv").export_statistics(stats, path)
        rows = read_rows(path)

        assert [row[0] for row in rows[2:9]] == [status.value for status in JobStatus]
        assert rows[5] == ["Offer", "1"]
        assert rows[2] == ["Applied", "0"]
