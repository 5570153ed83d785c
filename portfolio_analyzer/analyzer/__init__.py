"""Portfolio scoring for GitHub profiles.

The :class:`PortfolioAnalyzer` orchestrates one analysis run, delegating to
the metric aggregator, score calculator, insight generator and report
assembler in this package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from ..collector import ProfileDataSource
from ..constants import DEFAULT_PROFILE_HOSTS, ERROR_MESSAGES
from ..exceptions import CollectionError, InvalidIdentifierError
from ..identifier import extract_identifier
from ..models import AnalysisOutcome, AnalysisStatus, Profile, Report, Repository
from .insights import generate_insights
from .metrics import aggregate_metrics
from .report import assemble_report
from .scoring import calculate_scores, total_score

logger = logging.getLogger(__name__)


def build_report(
    profile: Profile,
    repositories: Sequence[Repository],
    now: datetime,
) -> Report:
    """Score an already fetched snapshot.

    Raises:
        NoRepositoriesError: If ``repositories`` is empty
    """
    metrics = aggregate_metrics(profile, repositories, now)
    scores = calculate_scores(metrics)
    insights = generate_insights(metrics, profile)
    return assemble_report(metrics, scores, insights)


@dataclass
class PortfolioAnalyzer:
    """Run complete analyses against a profile data source."""

    data_source: ProfileDataSource
    hosts: Iterable[str] = field(default=DEFAULT_PROFILE_HOSTS)

    def resolve_identifier(self, raw_input: Optional[str]) -> str:
        """Extract the identifier or raise when there is nothing to analyze.

        Raises:
            InvalidIdentifierError: If the input yields an empty identifier
        """
        identifier = extract_identifier(raw_input, self.hosts)
        if not identifier:
            raise InvalidIdentifierError(ERROR_MESSAGES['invalid_identifier'])
        return identifier

    def fetch(self, identifier: str) -> Tuple[Profile, List[Repository]]:
        """Fetch profile and repositories, concurrently when supported."""
        fetch_snapshot = getattr(self.data_source, "fetch_snapshot", None)
        if callable(fetch_snapshot):
            return fetch_snapshot(identifier)

        profile = self.data_source.fetch_profile(identifier)
        repositories = self.data_source.fetch_repositories(identifier)
        return profile, list(repositories)

    def analyze(
        self, raw_input: Optional[str], now: Optional[datetime] = None
    ) -> AnalysisOutcome:
        """Analyze the account named by ``raw_input``.

        Failures never escape as exceptions; they are reported through the
        outcome's status so the caller can notify the user and reset any
        loading state. No partial report is ever returned.

        Args:
            raw_input: Username or profile URL typed by the user
            now: Reference time, defaults to the current UTC time

        Returns:
            AnalysisOutcome describing how the run ended
        """
        try:
            identifier = self.resolve_identifier(raw_input)
        except InvalidIdentifierError as exc:
            return AnalysisOutcome(
                status=AnalysisStatus.INVALID_IDENTIFIER,
                message=str(exc),
            )

        now = now or datetime.now(timezone.utc)

        try:
            profile, repositories = self.fetch(identifier)
        except CollectionError as exc:
            logger.debug(f"Fetching {identifier} failed: {exc}")
            return AnalysisOutcome(
                status=AnalysisStatus.FAILED,
                identifier=identifier,
                message=ERROR_MESSAGES['fetch_failed'],
                detail=str(exc),
            )

        if not repositories:
            return AnalysisOutcome(
                status=AnalysisStatus.NO_REPOSITORIES,
                identifier=identifier,
                profile=profile,
                message=ERROR_MESSAGES['no_repositories'],
            )

        report = build_report(profile, repositories, now)
        logger.debug(f"Scored {identifier}: {report.total_score}/100")
        return AnalysisOutcome(
            status=AnalysisStatus.ANALYSED,
            identifier=identifier,
            profile=profile,
            report=report,
        )


__all__ = [
    "PortfolioAnalyzer",
    "build_report",
    "aggregate_metrics",
    "calculate_scores",
    "total_score",
    "generate_insights",
    "assemble_report",
]
