"""Tests for the command-line interface."""

import json
from unittest.mock import Mock, patch

import pytest

from seo_tags import cli
from seo_tags.analyzer import UrlAnalysis
from seo_tags.config import settings
from seo_tags.exceptions import FetchError, InvalidURLError
from seo_tags.fetcher import FetchResponse
from seo_tags.request_log import SqliteRequestLog

PAGE = "<title>Welcome to the Example Store</title>"


@pytest.fixture(autouse=True)
def request_log_url(tmp_path, monkeypatch):
    """Point the CLI at a SQLite request log in a temporary directory."""
    db_url = f"sqlite:///{tmp_path / 'requests.db'}"
    monkeypatch.setattr(settings, "REQUEST_LOG_BACKEND", "sqlite")
    monkeypatch.setattr(settings, "REQUEST_LOG_URL", db_url)
    return db_url


@pytest.fixture
def request_log(request_log_url):
    log = SqliteRequestLog(db_url=request_log_url)
    yield log
    log.close()


def run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


class TestAnalyzeCommand:
    """Test cases for `seo-tags analyze`."""

    def test_json_output(self, capsys):
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            from seo_tags.analyzer import SEOTagAnalyzer
            result = SEOTagAnalyzer().analyze_html("https://example.com", PAGE)
            mock_analyze.return_value = [UrlAnalysis(url="https://example.com", result=result)]

            code = run_cli(["--log-level", "ERROR", "analyze", "example.com", "-o", "json"])

        assert code == 0
        mock_analyze.assert_called_once()
        assert mock_analyze.call_args[0][0] == ["https://example.com"]
        payload = json.loads(capsys.readouterr().out)
        assert payload["url"] == "https://example.com"
        assert payload["tags"]["basic"][0]["status"] == "optimal"

    def test_text_output(self, capsys):
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            from seo_tags.analyzer import SEOTagAnalyzer
            result = SEOTagAnalyzer().analyze_html("https://example.com", PAGE)
            mock_analyze.return_value = [UrlAnalysis(url="https://example.com", result=result)]

            code = run_cli(["--log-level", "ERROR", "analyze", "https://example.com"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Overall Score" in out
        assert "Basic SEO Tags: Missing Tags" in out
        assert "Add Critical Missing Tags" in out

    def test_fetch_error_exit_code(self, capsys):
        error = FetchError("https://example.com", "Failed to fetch URL: Not Found", 404, "Not Found")
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            mock_analyze.return_value = [UrlAnalysis(url="https://example.com", error=error)]
            code = run_cli(["--log-level", "ERROR", "analyze", "https://example.com", "-o", "json"])

        payload = json.loads(capsys.readouterr().out)
        assert code == 1
        assert payload == {"url": "https://example.com", "message": "Failed to fetch URL: Not Found", "status": 404}

    def test_invalid_url_exit_code(self, capsys):
        error = InvalidURLError("https://")
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            mock_analyze.return_value = [UrlAnalysis(url="https://", error=error)]
            code = run_cli(["--log-level", "ERROR", "analyze", "https://"])

        assert code == 2
        assert "Invalid URL format" in capsys.readouterr().out

    def test_unexpected_failure_is_generic(self, capsys):
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls", side_effect=RuntimeError("boom")):
            code = run_cli(["--log-level", "CRITICAL", "analyze", "https://example.com"])

        err = capsys.readouterr().err
        assert code == 1
        assert "Failed to analyze website. Please try again." in err
        assert "boom" not in err

    def test_output_file(self, tmp_path):
        target = tmp_path / "report.json"
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            from seo_tags.analyzer import SEOTagAnalyzer
            result = SEOTagAnalyzer().analyze_html("https://example.com", PAGE)
            mock_analyze.return_value = [UrlAnalysis(url="https://example.com", result=result)]
            run_cli(["--log-level", "ERROR", "analyze", "https://example.com", "-o", "json", "-f", str(target)])

        assert json.loads(target.read_text())["score"] == result.score

    def test_text_output_file(self, tmp_path, capsys):
        target = tmp_path / "report.txt"
        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            from seo_tags.analyzer import SEOTagAnalyzer
            result = SEOTagAnalyzer().analyze_html("https://example.com", PAGE)
            mock_analyze.return_value = [UrlAnalysis(url="https://example.com", result=result)]
            code = run_cli(["--log-level", "ERROR", "analyze", "https://example.com", "-f", str(target)])

        assert code == 0
        report = target.read_text(encoding="utf-8")
        assert "Overall Score" in report
        assert "SEO Tag Analysis for: https://example.com" in report
        out = capsys.readouterr().out
        assert "Results written to" in out
        assert "Overall Score" not in out

    @pytest.mark.parametrize("content", ["{not json", '{"title_max": "long"}'])
    def test_bad_thresholds_file_exits_with_failure(self, tmp_path, capsys, content):
        path = tmp_path / "thresholds.json"
        path.write_text(content)

        with patch("seo_tags.cli.SEOTagAnalyzer.analyze_urls") as mock_analyze:
            code = run_cli([
                "--log-level", "CRITICAL", "analyze", "https://example.com", "--thresholds", str(path),
            ])

        assert code == 1
        mock_analyze.assert_not_called()
        assert "Invalid thresholds file" in capsys.readouterr().err


class TestHistoryCommand:
    """Test cases for `seo-tags history`."""

    def test_empty_history(self, capsys):
        assert run_cli(["history"]) == 0
        assert "No requests logged yet." in capsys.readouterr().out

    def test_history_json_filtered(self, capsys, request_log):
        request_log.record("https://a.test", "2024-01-01T00:00:00+00:00")
        request_log.record("https://b.test", "2024-01-02T00:00:00+00:00")

        assert run_cli(["history", "--url", "a.test", "-o", "json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload == [{"id": 1, "url": "https://a.test", "requestDate": "2024-01-01T00:00:00+00:00"}]

    def test_history_lists_earlier_analysis(self, capsys):
        """Requests logged by `analyze` show up in a later `history` run."""
        fetcher = Mock()
        fetcher.fetch.return_value = FetchResponse(
            url="https://a.test", ok=True, status_code=200, status_text="OK", body=PAGE
        )
        with patch("seo_tags.analyzer.WebFetcher", return_value=fetcher):
            assert run_cli(["--log-level", "ERROR", "analyze", "https://a.test", "-o", "json"]) == 0
        capsys.readouterr()

        assert run_cli(["--log-level", "ERROR", "history"]) == 0

        out = capsys.readouterr().out
        assert "https://a.test" in out
        assert "No requests logged yet." not in out

    def test_memory_backend_warns_about_history(self, capsys, monkeypatch):
        monkeypatch.setattr(settings, "REQUEST_LOG_BACKEND", "memory")

        assert run_cli(["--log-level", "WARNING", "history"]) == 0

        assert "keeps no history between runs" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    cli.main([])
    assert "usage" in capsys.readouterr().out.lower()
