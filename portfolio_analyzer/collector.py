"""Profile data source backed by the GitHub REST API."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple
from urllib.parse import quote

import requests

from .api_client import GitHubApiClient
from .config import Config
from .constants import FETCH_WORKERS
from .exceptions import ApiError
from .models import Profile, Repository
from .utils import parse_timestamp

logger = logging.getLogger(__name__)


class ProfileDataSource(Protocol):
    """Anything able to supply a profile snapshot for an identifier."""

    def fetch_profile(self, identifier: str) -> Profile: ...

    def fetch_repositories(self, identifier: str) -> List[Repository]: ...


def profile_from_payload(payload: Dict[str, Any]) -> Profile:
    """Build a :class:`Profile` from a ``/users/{login}`` response.

    Raises:
        ApiError: If required fields are missing or malformed
    """
    try:
        return Profile(
            login=payload["login"],
            name=payload.get("name") or None,
            bio=payload.get("bio") or None,
            followers=int(payload.get("followers") or 0),
            created_at=parse_timestamp(payload["created_at"]),
            html_url=payload.get("html_url") or "",
            avatar_url=payload.get("avatar_url") or "",
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ApiError(f"Malformed profile payload: {exc}") from exc


def repository_from_payload(payload: Dict[str, Any]) -> Repository:
    """Build a :class:`Repository` from one ``/users/{login}/repos`` item.

    A repository that was never pushed to has a null ``pushed_at`` and
    never counts as recently active.

    Raises:
        ApiError: If fields are malformed
    """
    pushed_at = payload.get("pushed_at")
    try:
        return Repository(
            stars=int(payload.get("stargazers_count") or 0),
            language=payload.get("language") or None,
            description=payload.get("description") or None,
            pushed_at=parse_timestamp(pushed_at) if pushed_at else None,
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise ApiError(f"Malformed repository payload: {exc}") from exc


@dataclass
class GitHubProfileCollector:
    """Fetch a public profile and its first page of repositories."""

    config: Config = field(default_factory=Config)
    session: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        self.api_client = GitHubApiClient(self.config, self.session)

    def fetch_profile(self, identifier: str) -> Profile:
        payload = self.api_client.request_json(f"/users/{quote(identifier, safe='')}")
        profile = profile_from_payload(payload)
        logger.debug(f"Fetched profile {profile.login}")
        return profile

    def fetch_repositories(self, identifier: str) -> List[Repository]:
        params = {"per_page": self.config.api.per_page}
        payload = self.api_client.request_list(
            f"/users/{quote(identifier, safe='')}/repos", params=params
        )
        repositories = [repository_from_payload(item) for item in payload]
        logger.debug(f"Fetched {len(repositories)} repositories for {identifier}")
        return repositories

    def fetch_snapshot(self, identifier: str) -> Tuple[Profile, List[Repository]]:
        """Fetch profile and repositories concurrently.

        Both requests must succeed; the first failure is re-raised.
        """
        with ThreadPoolExecutor(max_workers=FETCH_WORKERS) as executor:
            profile_future = executor.submit(self.fetch_profile, identifier)
            repos_future = executor.submit(self.fetch_repositories, identifier)
            return profile_future.result(), repos_future.result()

    def close(self) -> None:
        self.api_client.close()

    def __enter__(self) -> "GitHubProfileCollector":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
