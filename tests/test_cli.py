# tests/test_cli.py
"""Tests for the seo-audit command line."""

import asyncio
import json

import pytest

from conftest import PAGE_URL, route_transport
from seo_audit import cli
from seo_audit.auditor import run_audit
from seo_audit.exceptions import FetchError


@pytest.fixture
def offline_audit(monkeypatch, good_site_routes):
    """Route the CLI's audits through a mocked transport."""
    def fake_run_audit_sync(url, config=None, thresholds=None):
        return asyncio.run(run_audit(
            url,
            config=config,
            thresholds=thresholds,
            transport=route_transport(good_site_routes),
        ))

    monkeypatch.setattr(cli, "run_audit_sync", fake_run_audit_sync)


class TestCli:
    """Tests for cli.main."""

    def test_text_report(self, offline_audit, capsys):
        assert cli.main([PAGE_URL, "--log-level", "ERROR"]) == 0

        out = capsys.readouterr().out
        assert f"SEO Audit for: {PAGE_URL}" in out
        assert "Overall Score:" in out

    def test_json_report(self, offline_audit, capsys):
        assert cli.main([PAGE_URL, "--json", "--log-level", "ERROR"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["url"] == PAGE_URL
        assert payload["status"] == "success"

    def test_output_file(self, offline_audit, tmp_path, capsys):
        target = tmp_path / "report.json"
        assert cli.main([PAGE_URL, "--output", str(target), "--log-level", "ERROR"]) == 0

        payload = json.loads(target.read_text())
        assert payload["metadata"]["version"] == "2.0"

    def test_fetch_error_exits_1(self, monkeypatch, capsys):
        def fail(url, config=None, thresholds=None):
            raise FetchError.http_status(url, 404)

        monkeypatch.setattr(cli, "run_audit_sync", fail)

        assert cli.main([PAGE_URL, "--json", "--log-level", "ERROR"]) == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["error"] == "Audit failed"

    def test_missing_url_exits_2(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 2

    def test_bad_thresholds_file_exits_2(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")

        with pytest.raises(SystemExit) as exc_info:
            cli.main([PAGE_URL, "--thresholds", str(bad), "--log-level", "ERROR"])
        assert exc_info.value.code == 2
