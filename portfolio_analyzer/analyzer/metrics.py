"""Reduce a profile snapshot into portfolio counters."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from ..constants import ANALYSIS_WINDOWS
from ..exceptions import NoRepositoriesError
from ..models import PortfolioMetrics, Profile, Repository
from ..utils import ensure_aware


def is_documented(repo: Repository) -> bool:
    """Check whether a repository carries a meaningful description."""
    return bool(repo.description) and len(repo.description) > ANALYSIS_WINDOWS['min_description_length']


def aggregate_metrics(
    profile: Profile,
    repositories: Sequence[Repository],
    now: datetime,
) -> PortfolioMetrics:
    """Compute the counters the scores and insights are built from.

    Args:
        profile: Account the repositories belong to
        repositories: Non-empty repository snapshot, in any order
        now: Reference time for the activity window and account age

    Returns:
        PortfolioMetrics for the snapshot

    Raises:
        NoRepositoriesError: If ``repositories`` is empty
    """
    if not repositories:
        raise NoRepositoriesError(profile.login)

    now = ensure_aware(now)
    active_since = now - timedelta(days=ANALYSIS_WINDOWS['active_days'])

    languages = {repo.language for repo in repositories if repo.language}
    active = [
        repo for repo in repositories
        if repo.pushed_at is not None and ensure_aware(repo.pushed_at) > active_since
    ]
    account_age = now - ensure_aware(profile.created_at)

    return PortfolioMetrics(
        repo_count=len(repositories),
        total_stars=sum(repo.stars for repo in repositories),
        language_count=len(languages),
        documented_repos=sum(1 for repo in repositories if is_documented(repo)),
        active_repos=len(active),
        account_age_days=account_age // timedelta(days=1),
        followers=profile.followers,
    )
