"""Domain models shared across the portfolio analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import CATEGORY_NAMES
from .utils import round_half_up


@dataclass(frozen=True, slots=True)
class Profile:
    """Public account details returned by the data source."""

    login: str
    created_at: datetime
    html_url: str = ""
    avatar_url: str = ""
    name: Optional[str] = None
    bio: Optional[str] = None
    followers: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.login

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the profile for JSON export."""

        return {
            "login": self.login,
            "name": self.name,
            "bio": self.bio,
            "followers": self.followers,
            "created_at": self.created_at.isoformat(),
            "html_url": self.html_url,
            "avatar_url": self.avatar_url,
        }


@dataclass(frozen=True, slots=True)
class Repository:
    """Single public repository belonging to an account."""

    pushed_at: Optional[datetime] = None
    stars: int = 0
    language: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PortfolioMetrics:
    """Counters derived from one profile snapshot."""

    repo_count: int
    total_stars: int
    language_count: int
    documented_repos: int
    active_repos: int
    account_age_days: int
    followers: int = 0

    def to_stats(self) -> Dict[str, int]:
        """Summary shown alongside the score."""

        return {
            "total_repos": self.repo_count,
            "total_stars": self.total_stars,
            "languages": self.language_count,
            "active_repos": self.active_repos,
            "followers": self.followers,
            "account_age_days": self.account_age_days,
        }


@dataclass(frozen=True, slots=True)
class CategoryScores:
    """Unrounded category scores, each worth up to 20 points."""

    documentation: float
    activity: float
    impact: float
    technical_depth: float
    structure: float

    @property
    def total(self) -> float:
        return (
            self.documentation
            + self.activity
            + self.impact
            + self.technical_depth
            + self.structure
        )

    def as_dict(self) -> Dict[str, float]:
        values = (
            self.documentation,
            self.activity,
            self.impact,
            self.technical_depth,
            self.structure,
        )
        return dict(zip(CATEGORY_NAMES, values))

    def rounded(self) -> Dict[str, int]:
        """Round every category for display."""

        return {name: round_half_up(value) for name, value in self.as_dict().items()}


@dataclass(frozen=True, slots=True)
class InsightSet:
    """Strengths, red flags and recommendations for one analysis."""

    strengths: Tuple[str, ...] = ()
    red_flags: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Report:
    """Final, read-only result of one portfolio analysis."""

    total_score: int
    breakdown: Mapping[str, int]
    strengths: Tuple[str, ...]
    red_flags: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    stats: Mapping[str, int]

    def __post_init__(self) -> None:
        # Freeze the mappings so presentation code cannot edit the report.
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report into a JSON friendly payload."""

        return {
            "total_score": self.total_score,
            "breakdown": dict(self.breakdown),
            "strengths": list(self.strengths),
            "red_flags": list(self.red_flags),
            "recommendations": list(self.recommendations),
            "stats": dict(self.stats),
        }


class AnalysisStatus(str, Enum):
    """How an analysis run ended."""

    ANALYSED = "analysed"
    NO_REPOSITORIES = "no_repositories"
    INVALID_IDENTIFIER = "invalid_identifier"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """Typed result returned by :meth:`PortfolioAnalyzer.analyze`.

    Only ``ANALYSED`` outcomes carry a report. Every other status carries a
    user-facing ``message`` and, for failures, the underlying ``detail``.
    """

    status: AnalysisStatus
    identifier: str = ""
    profile: Optional[Profile] = None
    report: Optional[Report] = None
    message: Optional[str] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is AnalysisStatus.ANALYSED

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status.value,
            "identifier": self.identifier,
        }
        if self.profile is not None:
            payload["profile"] = self.profile.to_dict()
        if self.report is not None:
            payload["report"] = self.report.to_dict()
        if self.message:
            payload["message"] = self.message
        return payload
