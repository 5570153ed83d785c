from __future__ import annotations

from datetime import datetime, timezone

import pytest

from portfolio_analyzer.analyzer import PortfolioAnalyzer
from portfolio_analyzer.collector import (
    GitHubProfileCollector,
    profile_from_payload,
    repository_from_payload,
)
from portfolio_analyzer.config import APIConfig, Config
from portfolio_analyzer.exceptions import ApiError, ProfileNotFoundError
from portfolio_analyzer.models import AnalysisStatus

USER_PAYLOAD = {
    "login": "octocat",
    "name": "The Octocat",
    "bio": None,
    "followers": 9000,
    "created_at": "2011-01-25T18:44:36Z",
    "html_url": "https://github.com/octocat",
    "avatar_url": "https://avatars.githubusercontent.com/u/583231",
}

REPOS_PAYLOAD = [
    {
        "name": "Hello-World",
        "stargazers_count": 2500,
        "language": None,
        "description": "My first repository on GitHub!",
        "pushed_at": "2024-05-20T10:00:00Z",
    },
    {
        "name": "Spoon-Knife",
        "stargazers_count": None,
        "language": "HTML",
        "description": None,
        "pushed_at": "2023-01-01T00:00:00Z",
    },
]


@pytest.fixture
def collector() -> GitHubProfileCollector:
    return GitHubProfileCollector(Config(api=APIConfig(enable_cache=False, per_page=50)))


def test_profile_from_payload_maps_fields():
    profile = profile_from_payload(USER_PAYLOAD)

    assert profile.login == "octocat"
    assert profile.display_name == "The Octocat"
    assert profile.bio is None
    assert profile.followers == 9000
    assert profile.created_at == datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc)


def test_profile_without_name_displays_login():
    profile = profile_from_payload(USER_PAYLOAD | {"name": None})

    assert profile.display_name == "octocat"


def test_repository_from_payload_defaults_missing_stars():
    repository = repository_from_payload(REPOS_PAYLOAD[1])

    assert repository.stars == 0
    assert repository.language == "HTML"
    assert repository.description is None


def test_malformed_payloads_raise_api_error():
    with pytest.raises(ApiError):
        profile_from_payload({"login": "octocat"})
    with pytest.raises(ApiError):
        repository_from_payload({"name": "x", "pushed_at": "yesterday"})
    with pytest.raises(ApiError):
        profile_from_payload(USER_PAYLOAD | {"created_at": None})


def test_repository_never_pushed_has_no_push_time():
    repository = repository_from_payload(REPOS_PAYLOAD[0] | {"pushed_at": None})

    assert repository.pushed_at is None
    assert repository.stars == 2500


def test_fetch_snapshot_requests_single_page(collector, monkeypatch):
    calls = []

    def fake_request_json(path, params=None):
        calls.append(("json", path, params))
        return USER_PAYLOAD

    def fake_request_list(path, params=None):
        calls.append(("list", path, params))
        return REPOS_PAYLOAD

    monkeypatch.setattr(collector.api_client, "request_json", fake_request_json)
    monkeypatch.setattr(collector.api_client, "request_list", fake_request_list)

    profile, repositories = collector.fetch_snapshot("octocat")

    assert profile.login == "octocat"
    assert [repo.stars for repo in repositories] == [2500, 0]
    assert sorted(calls, key=lambda call: call[0]) == [
        ("json", "/users/octocat", None),
        ("list", "/users/octocat/repos", {"per_page": 50}),
    ]


def test_fetch_snapshot_propagates_failures(collector, monkeypatch):
    def missing(path, params=None):
        raise ProfileNotFoundError("GitHub resource not found", status_code=404)

    monkeypatch.setattr(collector.api_client, "request_json", missing)
    monkeypatch.setattr(collector.api_client, "request_list", lambda path, params=None: [])

    with pytest.raises(ProfileNotFoundError):
        collector.fetch_snapshot("ghost")


def test_collector_drives_full_analysis(collector, monkeypatch):
    monkeypatch.setattr(collector.api_client, "request_json", lambda path, params=None: USER_PAYLOAD)
    monkeypatch.setattr(collector.api_client, "request_list", lambda path, params=None: REPOS_PAYLOAD)

    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    outcome = PortfolioAnalyzer(collector).analyze("https://github.com/octocat", now)

    assert outcome.status is AnalysisStatus.ANALYSED
    # Documentation 10, Activity 10, Impact 20, TechnicalDepth 4, Structure 10
    assert outcome.report.total_score == 54
    assert outcome.report.stats["followers"] == 9000


def test_never_pushed_repository_counts_as_inactive(collector, monkeypatch):
    repos = REPOS_PAYLOAD + [
        {
            "name": "empty",
            "stargazers_count": 0,
            "language": None,
            "description": None,
            "pushed_at": None,
        }
    ]
    monkeypatch.setattr(collector.api_client, "request_json", lambda path, params=None: USER_PAYLOAD)
    monkeypatch.setattr(collector.api_client, "request_list", lambda path, params=None: repos)

    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    outcome = PortfolioAnalyzer(collector).analyze("octocat", now)

    assert outcome.status is AnalysisStatus.ANALYSED
    assert outcome.report.stats["total_repos"] == 3
    assert outcome.report.stats["active_repos"] == 1


def test_identifier_is_escaped_in_request_paths(collector, monkeypatch):
    paths = []

    def fake_request_json(path, params=None):
        paths.append(path)
        return USER_PAYLOAD

    def fake_request_list(path, params=None):
        paths.append(path)
        return REPOS_PAYLOAD

    monkeypatch.setattr(collector.api_client, "request_json", fake_request_json)
    monkeypatch.setattr(collector.api_client, "request_list", fake_request_list)

    collector.fetch_profile("alice?tab=x")
    collector.fetch_repositories("alice?tab=x")

    assert paths == ["/users/alice%3Ftab%3Dx", "/users/alice%3Ftab%3Dx/repos"]


def test_profile_url_with_query_string_fetches_handle(collector, monkeypatch):
    paths = []

    def fake_request_json(path, params=None):
        paths.append(path)
        return USER_PAYLOAD

    def fake_request_list(path, params=None):
        paths.append(path)
        return REPOS_PAYLOAD

    monkeypatch.setattr(collector.api_client, "request_json", fake_request_json)
    monkeypatch.setattr(collector.api_client, "request_list", fake_request_list)

    outcome = PortfolioAnalyzer(collector).analyze("https://github.com/octocat?tab=repositories")

    assert outcome.identifier == "octocat"
    assert sorted(paths) == ["/users/octocat", "/users/octocat/repos"]
