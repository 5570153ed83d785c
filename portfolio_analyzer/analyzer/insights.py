"""Rule table turning metrics into strengths, red flags and advice."""

from __future__ import annotations

from typing import List

from ..constants import INSIGHT_MESSAGES, INSIGHT_THRESHOLDS, RECOMMENDATIONS
from ..models import InsightSet, PortfolioMetrics, Profile


def generate_insights(metrics: PortfolioMetrics, profile: Profile) -> InsightSet:
    """Evaluate each rule once, in table order."""
    strengths: List[str] = []
    red_flags: List[str] = []

    if metrics.total_stars > INSIGHT_THRESHOLDS['community_stars']:
        strengths.append(INSIGHT_MESSAGES['community_engagement'])
    if metrics.language_count >= INSIGHT_THRESHOLDS['diverse_languages']:
        strengths.append(INSIGHT_MESSAGES['technical_diversity'])
    if metrics.active_repos >= INSIGHT_THRESHOLDS['consistent_active_repos']:
        strengths.append(INSIGHT_MESSAGES['consistent_activity'])

    if not profile.bio:
        red_flags.append(INSIGHT_MESSAGES['missing_bio'])
    if metrics.active_repos == 0:
        red_flags.append(INSIGHT_MESSAGES['no_recent_activity'])

    return InsightSet(
        strengths=tuple(strengths),
        red_flags=tuple(red_flags),
        recommendations=RECOMMENDATIONS,
    )
