from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from portfolio_analyzer import cli
from portfolio_analyzer import config as config_module
from portfolio_analyzer.config import Config
from portfolio_analyzer.exceptions import ProfileNotFoundError
from portfolio_analyzer.session import AnalysisSession

runner = CliRunner()


class ClosingSource:
    """Wrap a fake data source with the collector's context manager API."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.closed = False

    def fetch_profile(self, identifier):
        return self.inner.fetch_profile(identifier)

    def fetch_repositories(self, identifier):
        return self.inner.fetch_repositories(identifier)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.closed = True


@pytest.fixture
def stub_config(monkeypatch, tmp_path) -> Config:
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")
    config = Config()
    monkeypatch.setattr(cli, "_load_config", lambda: config)
    return config


@pytest.fixture
def use_source(monkeypatch, stub_config):
    def install(source) -> ClosingSource:
        wrapped = ClosingSource(source)
        monkeypatch.setattr(cli, "_build_collector", lambda config: wrapped)
        return wrapped

    return install


def test_analyze_renders_report(use_source, fake_source, sample_snapshot):
    profile, repositories = sample_snapshot
    source = use_source(fake_source(profile, repositories))

    result = runner.invoke(
        cli.app, ["analyze", "https://github.com/octocat", "--now", "2024-06-01T12:00:00Z"]
    )

    assert result.exit_code == 0, result.output
    assert "Portfolio Score" in result.output
    assert "35/100" in result.output
    assert "Missing professional bio." in result.output
    assert source.closed


def test_analyze_writes_json(use_source, fake_source, sample_snapshot, tmp_path):
    profile, repositories = sample_snapshot
    use_source(fake_source(profile, repositories))

    result = runner.invoke(
        cli.app,
        [
            "analyze",
            "octocat",
            "--format",
            "json",
            "--output",
            str(tmp_path),
            "--now",
            "2024-06-01T12:00:00+00:00",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert payload["report"]["total_score"] == 35


def test_analyze_publishes_through_session(use_source, fake_source, sample_snapshot, monkeypatch):
    profile, repositories = sample_snapshot
    use_source(fake_source(profile, repositories))
    sessions = []

    class RecordingSession(AnalysisSession):
        def __init__(self, *args, **kwargs) -> None:
            super().__init__(*args, **kwargs)
            sessions.append(self)

    monkeypatch.setattr(cli, "AnalysisSession", RecordingSession)

    result = runner.invoke(cli.app, ["analyze", "octocat", "--now", "2024-06-01T12:00:00Z"])

    assert result.exit_code == 0, result.output
    [session] = sessions
    assert session.last_outcome.report.total_score == 35
    assert not session.loading


def test_analyze_writes_markdown(use_source, fake_source, sample_snapshot, tmp_path):
    profile, repositories = sample_snapshot
    use_source(fake_source(profile, repositories))

    result = runner.invoke(
        cli.app, ["analyze", "octocat", "-f", "markdown", "-o", str(tmp_path)]
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "report.md").exists()


def test_analyze_reports_fetch_failure(use_source, fake_source):
    use_source(fake_source(error=ProfileNotFoundError("not found", status_code=404)))

    result = runner.invoke(cli.app, ["analyze", "ghost"])

    assert result.exit_code == 1
    assert "Invalid GitHub username OR URL." in result.output


def test_analyze_reports_no_repositories(use_source, fake_source, make_profile):
    use_source(fake_source(make_profile(), []))

    result = runner.invoke(cli.app, ["analyze", "octocat"])

    assert result.exit_code == 2
    assert "No public repositories found." in result.output


def test_analyze_rejects_blank_input(use_source, fake_source):
    source = use_source(fake_source())

    result = runner.invoke(cli.app, ["analyze", "https://github.com/"])

    assert result.exit_code == 1
    assert source.inner.calls == []


def test_analyze_rejects_bad_timestamp(use_source, fake_source):
    use_source(fake_source())

    result = runner.invoke(cli.app, ["analyze", "octocat", "--now", "yesterday"])

    assert result.exit_code != 0


def test_config_set_and_get(stub_config, tmp_path):
    result = runner.invoke(cli.app, ["config", "set", "api.timeout", "12"])

    assert result.exit_code == 0, result.output
    assert stub_config.api.timeout == 12
    assert (tmp_path / "config.toml").exists()

    result = runner.invoke(cli.app, ["config", "get", "api.timeout"])
    assert "api.timeout = 12" in result.output


def test_config_set_invalid_value_exits(stub_config):
    result = runner.invoke(cli.app, ["config", "set", "api.timeout", "-5"])

    assert result.exit_code == 1


def test_config_show(stub_config):
    result = runner.invoke(cli.app, ["config", "show"])

    assert result.exit_code == 0
    assert "api.github.com" in result.output


def test_clear_cache_without_cache(monkeypatch, tmp_path):
    from portfolio_analyzer import api_client

    monkeypatch.setattr(api_client, "CACHE_DIR", tmp_path)

    result = runner.invoke(cli.app, ["clear-cache"])

    assert result.exit_code == 0
    assert "No cache found" in result.output
