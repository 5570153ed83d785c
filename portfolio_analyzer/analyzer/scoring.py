"""Category scores and the combined portfolio score."""

from __future__ import annotations

from ..constants import SCORING_WEIGHTS
from ..models import CategoryScores, PortfolioMetrics
from ..utils import round_half_up


def _clamp(value: float, upper: float, lower: float = 0) -> float:
    return max(lower, min(upper, value))


def calculate_scores(metrics: PortfolioMetrics) -> CategoryScores:
    """Map portfolio counters onto the five 20-point categories.

    Documentation and Activity are the documented/active share of all
    repositories. Impact earns a point per five stars and TechnicalDepth
    four points per language, both capped. Structure rewards having at
    least five public repositories.
    """
    cap = SCORING_WEIGHTS['category_max']
    repo_count = metrics.repo_count

    if repo_count >= SCORING_WEIGHTS['structure_min_repos']:
        structure = SCORING_WEIGHTS['structure_full']
    else:
        structure = SCORING_WEIGHTS['structure_partial']

    return CategoryScores(
        documentation=_clamp(metrics.documented_repos / repo_count * cap, cap),
        activity=_clamp(metrics.active_repos / repo_count * cap, cap),
        impact=_clamp(metrics.total_stars / SCORING_WEIGHTS['stars_per_point'], cap),
        technical_depth=_clamp(metrics.language_count * SCORING_WEIGHTS['points_per_language'], cap),
        structure=float(structure),
    )


def total_score(scores: CategoryScores) -> int:
    """Sum the unrounded categories, clamp to 0-100 and round once."""
    return round_half_up(_clamp(scores.total, SCORING_WEIGHTS['total_max']))
