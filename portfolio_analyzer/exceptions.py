"""Custom exceptions for the GitHub portfolio analyzer."""

from __future__ import annotations


class PortfolioAnalyzerError(Exception):
    """Base exception for all portfolio analyzer errors."""
    pass


# =============================================================================
# Data Collection Errors
# =============================================================================


class CollectionError(PortfolioAnalyzerError):
    """Base exception for data collection errors."""

    def __init__(self, message: str, source: str | None = None):
        """Initialize collection error.

        Args:
            message: Error message
            source: Source of the error (e.g., 'profile', 'repositories')
        """
        super().__init__(message)
        self.source = source


class ApiError(CollectionError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if available
        """
        super().__init__(message)
        self.status_code = status_code


class ProfileNotFoundError(ApiError):
    """Raised when the requested account does not exist."""
    pass


# =============================================================================
# Analysis Errors
# =============================================================================


class AnalysisError(PortfolioAnalyzerError):
    """Base exception for analysis errors."""
    pass


class NoRepositoriesError(AnalysisError):
    """Raised when an account has no public repositories to score."""

    def __init__(self, identifier: str = ""):
        message = "No public repositories found."
        if identifier:
            message = f"No public repositories found for '{identifier}'."
        super().__init__(message)
        self.identifier = identifier


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(PortfolioAnalyzerError):
    """Base exception for validation errors."""
    pass


class InvalidIdentifierError(ValidationError):
    """Raised when user input does not yield an account identifier."""
    pass
