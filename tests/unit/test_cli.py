"""Unit tests for the command-line entry point."""

import csv
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from job_tracker import cli
from job_tracker.analysis.exceptions import AnalysisCancelledError
from job_tracker.mail.exceptions import MailSourceError


@pytest.fixture
def run_settings(test_settings, tmp_path):
    """Settings writing into tmp_path, without login waits."""
    return test_settings.model_copy(update={
        "EXPORT_FILE": str(tmp_path / "apps.csv"),
        "STATISTICS_FILE": str(tmp_path / "stats.csv"),
        "METRICS_TEXTFILE": str(tmp_path / "metrics.prom"),
        "LOGIN_WAIT_SECONDS": 0,
    })


@pytest.fixture
def patched_cli(monkeypatch, run_settings, scripted_llm):
    """Route the CLI to test settings and a scripted LLM; returns the script setter."""
    state = {}

    def fake_llm_client(**kwargs):
        state["llm_kwargs"] = kwargs
        return state["llm"]

    def set_script(script):
        state["llm"] = scripted_llm(script)
        return state["llm"]

    monkeypatch.setattr(cli, "default_settings", run_settings)
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli, "OpenAICompatibleClient", fake_llm_client)
    return SimpleNamespace(set_script=set_script, state=state, settings=run_settings)


class TestParser:
    """Test argument parsing."""

    def test_flags(self):
        args = cli.build_parser().parse_args(["--mock", "--env-file", "x.env", "--log-level", "DEBUG"])
        assert args.mock is True
        assert args.env_file == "x.env"
        assert args.log_level == "DEBUG"

    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.mock is False
        assert args.env_file is None


class TestMockRun:
    """End-to-end run on the sample emails."""

    def test_mock_run_exports_results(self, patched_cli, details, capsys):
        patched_cli.set_script([
            "是", details("Company", "软件工程师", "已申请"),
            "是", details("TechCorp", "软件工程师", "在线测试"),
            "yes", details("Startup IO", "Frontend Developer", "Interview"),
        ])

        assert cli.main(["--mock"]) == 0

        settings = patched_cli.settings
        with open(settings.EXPORT_FILE, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert [row[2] for row in rows[1:]] == ["Applied", "OnlineAssessment", "Interview"]

        with open(settings.STATISTICS_FILE, newline="", encoding="utf-8") as f:
            assert list(csv.reader(f))[0] == ["Status Statistics"]

        with open(settings.METRICS_TEXTFILE, encoding="utf-8") as f:
            assert "jobtracker_emails_analyzed_total" in f.read()

        out = capsys.readouterr().out
        assert "Found 3 job-related emails" in out
        assert "• TechCorp - 软件工程师 (OnlineAssessment)" in out

    def test_llm_client_built_from_settings(self, patched_cli, details):
        patched_cli.set_script(["no", "no", "no"])

        assert cli.main(["--mock"]) == 0

        kwargs = patched_cli.state["llm_kwargs"]
        assert kwargs["base_url"] == "http://llm.test/v1"
        assert kwargs["model"] == "test-model"
        assert kwargs["api_key"] == "test-key"

    def test_no_export_without_applications(self, patched_cli):
        patched_cli.set_script(["no", "no", "no"])

        assert cli.main(["--mock"]) == 0

        with pytest.raises(FileNotFoundError):
            open(patched_cli.settings.EXPORT_FILE)

    def test_partial_results_after_cancellation(self, patched_cli, monkeypatch, make_application, capsys):
        partial = [make_application("Acme")]
        analyze_emails = AsyncMock(side_effect=AnalysisCancelledError("deadline_exceeded", partial, 1))
        monkeypatch.setattr(cli.JobAnalyzer, "analyze_emails", analyze_emails)
        patched_cli.set_script([])

        assert cli.main(["--mock"]) == 0

        with open(patched_cli.settings.EXPORT_FILE, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert [row[0] for row in rows[1:]] == ["Acme"]


class TestFatalErrors:
    """Test exit status 1 paths."""

    def test_missing_env_file(self, patched_cli, tmp_path):
        assert cli.main(["--env-file", str(tmp_path / "missing.env")]) == 1

    def test_invalid_configuration(self, patched_cli, monkeypatch):
        monkeypatch.setattr(
            cli,
            "default_settings",
            patched_cli.settings.model_copy(update={"EMAIL_ADDRESS": ""}),
        )
        assert cli.main([]) == 1

    def test_mail_source_failure(self, patched_cli, monkeypatch):
        failing = AsyncMock(side_effect=MailSourceError("IMAP login failed"))
        monkeypatch.setattr(cli.ImapEmailFetcher, "fetch", failing)

        assert cli.main([]) == 1
        failing.assert_awaited_once()


class TestGatewayRun:
    """Test the gateway login flow."""

    def test_login_url_printed_then_fetch(self, patched_cli, monkeypatch, capsys):
        settings = patched_cli.settings.model_copy(update={"GATEWAY_ENDPOINT": "http://gateway.test/mcp"})
        monkeypatch.setattr(cli, "default_settings", settings)

        session = SimpleNamespace(login_url="https://login.example.com/abc")
        monkeypatch.setattr(cli.GatewayEmailClient, "initiate_login", AsyncMock(return_value=session))
        monkeypatch.setattr(cli.GatewayEmailClient, "fetch", AsyncMock(return_value=[]))
        patched_cli.set_script([])

        assert cli.main([]) == 0

        out = capsys.readouterr().out
        assert "https://login.example.com/abc" in out
        assert "No emails found" in out
