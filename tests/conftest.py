from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import pytest

from portfolio_analyzer.models import Profile, Repository

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeDataSource:
    """In-memory data source recording every call."""

    def __init__(self, profile: Optional[Profile], repositories: List[Repository], error: Exception | None = None) -> None:
        self.profile = profile
        self.repositories = repositories
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def fetch_profile(self, identifier: str) -> Profile:
        self.calls.append(("profile", identifier))
        if self.error is not None:
            raise self.error
        assert self.profile is not None
        return self.profile

    def fetch_repositories(self, identifier: str) -> List[Repository]:
        self.calls.append(("repositories", identifier))
        if self.error is not None:
            raise self.error
        return list(self.repositories)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_profile() -> Callable[..., Profile]:
    def factory(**overrides) -> Profile:
        values = {
            "login": "octocat",
            "name": "The Octocat",
            "bio": "Building things",
            "followers": 42,
            "created_at": NOW - timedelta(days=365),
            "html_url": "https://github.com/octocat",
            "avatar_url": "https://avatars.example/octocat.png",
        }
        values.update(overrides)
        return Profile(**values)

    return factory


@pytest.fixture
def make_repo() -> Callable[..., Repository]:
    def factory(
        stars: int = 0,
        language: Optional[str] = None,
        description: Optional[str] = None,
        days_since_push: int = 365,
    ) -> Repository:
        return Repository(
            stars=stars,
            language=language,
            description=description,
            pushed_at=NOW - timedelta(days=days_since_push),
        )

    return factory


@pytest.fixture
def sample_snapshot(make_profile, make_repo):
    """Profile without bio and four repositories scoring 35 points."""
    profile = make_profile(bio=None)
    repositories = [
        make_repo(stars=10, language="Python", description="A well described project", days_since_push=10),
        make_repo(stars=0, language="Go", description="Another long description"),
        make_repo(stars=0, description="short"),
        make_repo(stars=0),
    ]
    return profile, repositories


@pytest.fixture
def fake_source() -> Callable[..., FakeDataSource]:
    def factory(profile=None, repositories=(), error=None) -> FakeDataSource:
        return FakeDataSource(profile, list(repositories), error)

    return factory
