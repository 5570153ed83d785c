"""Constants and configuration values for the portfolio analyzer."""

from __future__ import annotations

# =============================================================================
# API and HTTP Configuration
# =============================================================================

# GitHub API request defaults
API_DEFAULTS = {
    'per_page': 100,
    'timeout': 30,
    'cache_expire_seconds': 3600,  # 1 hour
}

# Retry configuration
RETRY_CONFIG = {
    'backoff_base': 2,  # Exponential backoff base (2^attempt)
    'max_retries': 3,
}

# HTTP status codes
HTTP_STATUS = {
    'not_found': 404,
    'retryable_errors': (500, 502, 503, 504),
}

# Profile and repository fetches run side by side
FETCH_WORKERS = 2

# Host markers recognised when extracting an account from a profile URL
DEFAULT_PROFILE_HOSTS = ("github.com",)

# =============================================================================
# Scoring
# =============================================================================

CATEGORY_NAMES = (
    "Documentation",
    "Activity",
    "Impact",
    "TechnicalDepth",
    "Structure",
)

SCORING_WEIGHTS = {
    'category_max': 20,
    'total_max': 100,
    'stars_per_point': 5,
    'points_per_language': 4,
    'structure_full': 20,
    'structure_partial': 10,
    'structure_min_repos': 5,
}

ANALYSIS_WINDOWS = {
    'active_days': 90,
    'min_description_length': 10,  # Descriptions must be strictly longer
}

# =============================================================================
# Insights
# =============================================================================

INSIGHT_THRESHOLDS = {
    'community_stars': 50,  # Strictly more than this many stars
    'diverse_languages': 3,
    'consistent_active_repos': 3,
}

INSIGHT_MESSAGES = {
    'community_engagement': "Strong community engagement.",
    'technical_diversity': "Good technical diversity.",
    'consistent_activity': "Consistent recent activity.",
    'missing_bio': "Missing professional bio.",
    'no_recent_activity': "No recent activity detected.",
}

RECOMMENDATIONS = (
    "Add structured README with architecture explanation.",
    "Pin 3–4 strong projects.",
    "Maintain weekly commits.",
)

# =============================================================================
# User-facing Messages
# =============================================================================

ERROR_MESSAGES = {
    'invalid_identifier': 'Enter a GitHub username or profile URL.',
    'fetch_failed': 'Invalid GitHub username OR URL.',
    'no_repositories': 'No public repositories found.',
    'config_invalid': 'Configuration error',
}

INFO_MESSAGES = {
    'analyzing': 'Analyzing...',
    'report_written': 'Report written',
}
