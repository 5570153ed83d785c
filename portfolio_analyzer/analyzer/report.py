"""Compose metrics, scores and insights into a report."""

from __future__ import annotations

from ..models import CategoryScores, InsightSet, PortfolioMetrics, Report
from .scoring import total_score


def assemble_report(
    metrics: PortfolioMetrics,
    scores: CategoryScores,
    insights: InsightSet,
) -> Report:
    return Report(
        total_score=total_score(scores),
        breakdown=scores.rounded(),
        strengths=insights.strengths,
        red_flags=insights.red_flags,
        recommendations=insights.recommendations,
        stats=metrics.to_stats(),
    )
