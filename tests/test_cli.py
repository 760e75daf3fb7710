from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

import cli.main as cli_main
from cli.config import MissingConfigurationError, get_settings


class _FakeResponse:
    last = None

    def __init__(self, body: bytes) -> None:
        self.body = body
        self.closed = False
        _FakeResponse.last = self

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.closed = True

    def iter_content(self, chunk_size: int = 8192):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]


class FakeClient:
    calls: list = []

    def __init__(self, settings) -> None:
        self.settings = settings

    def get(self, path, params=None, stream=False, expect_json=True):
        FakeClient.calls.append(("GET", path, params))
        if not expect_json:
            return _FakeResponse(b"date,portfolio,benchmark\n2024-01-01,120.0,110.0\n")
        return {"path": path, "params": params}

    def post(self, path, params=None):
        FakeClient.calls.append(("POST", path, params))
        return {"data_version": 2, "seed": (params or {}).get("seed")}


@pytest.fixture(autouse=True)
def fake_client(monkeypatch):
    FakeClient.calls = []
    monkeypatch.setattr(cli_main, "DashboardClient", FakeClient)
    monkeypatch.setenv("API_BASE_URL", "http://dashboard.test/")
    monkeypatch.delenv("API_TIMEOUT_SECONDS", raising=False)
    return FakeClient


def test_summary_passes_window_and_as_of() -> None:
    result = CliRunner().invoke(cli_main.cli, ["summary", "--window", "1y", "--as-of", "2024-01-02"])

    assert result.exit_code == 0, result.output
    assert FakeClient.calls == [("GET", "/api/v1/summary", {"window": "1Y", "as_of": "2024-01-02"})]
    assert '"path": "/api/v1/summary"' in result.output


def test_performance_defaults_to_all() -> None:
    result = CliRunner().invoke(cli_main.cli, ["performance"])
    assert result.exit_code == 0, result.output
    assert FakeClient.calls == [("GET", "/api/v1/performance", {"window": "ALL"})]


def test_invalid_window_is_rejected_locally() -> None:
    result = CliRunner().invoke(cli_main.cli, ["performance", "--window", "2W"])
    assert result.exit_code == 2
    assert FakeClient.calls == []


def test_invalid_as_of_is_rejected() -> None:
    result = CliRunner().invoke(cli_main.cli, ["summary", "--as-of", "01/02/2024"])
    assert result.exit_code == 2
    assert "YYYY-MM-DD" in result.output


@pytest.mark.parametrize(
    "args, path",
    [
        (["windows"], "/api/v1/windows"),
        (["holdings"], "/api/v1/holdings"),
        (["series-meta"], "/api/v1/series/meta"),
    ],
)
def test_simple_get_commands(args, path) -> None:
    result = CliRunner().invoke(cli_main.cli, args)
    assert result.exit_code == 0, result.output
    assert FakeClient.calls == [("GET", path, None)]


def test_refresh_with_and_without_seed() -> None:
    runner = CliRunner()
    assert runner.invoke(cli_main.cli, ["refresh", "--seed", "5"]).exit_code == 0
    assert runner.invoke(cli_main.cli, ["refresh"]).exit_code == 0
    assert FakeClient.calls == [
        ("POST", "/api/v1/refresh", {"seed": 5}),
        ("POST", "/api/v1/refresh", None),
    ]


def test_export_writes_csv(tmp_path: Path) -> None:
    target = tmp_path / "perf.csv"
    result = CliRunner().invoke(cli_main.cli, ["export", "--window", "6m", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_text().startswith("date,portfolio,benchmark")
    assert FakeClient.calls == [("GET", "/api/v1/export/performance", {"window": "6M"})]
    assert _FakeResponse.last.closed is True


def test_missing_base_url(monkeypatch) -> None:
    monkeypatch.delenv("API_BASE_URL", raising=False)
    result = CliRunner().invoke(cli_main.cli, ["windows"])
    assert result.exit_code != 0
    assert "API base URL is required" in result.output


def test_settings_strip_trailing_slash_and_read_timeout(monkeypatch) -> None:
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "2.5")
    settings = get_settings(base_url="http://x/", token="t")
    assert settings.base_url == "http://x"
    assert settings.timeout == 2.5


def test_settings_reject_bad_timeout(monkeypatch) -> None:
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "soon")
    with pytest.raises(MissingConfigurationError):
        get_settings(base_url="http://x")
    with pytest.raises(MissingConfigurationError):
        get_settings(base_url="http://x", timeout=0)
