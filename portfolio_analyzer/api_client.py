"""GitHub REST API client used to fetch public profile data."""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import requests
import requests_cache

from .config import Config
from .constants import HTTP_STATUS, RETRY_CONFIG
from .exceptions import ApiError, ProfileNotFoundError

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".cache" / "portfolio_analyzer"
CACHE_NAME = "api_cache"


class GitHubApiClient:
    """Thin wrapper around the public GitHub REST API.

    This class handles:
    - Request building and execution
    - Optional response caching
    - Retries with exponential backoff
    - Error mapping to the package's exceptions
    """

    def __init__(
        self,
        config: Config,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub API client.

        Args:
            config: Configuration object with API URL and request settings
            session: Optional requests session (a cached session is created
                lazily when omitted and caching is enabled)
        """
        self.config = config
        self.session = session
        self._session_lock = threading.Lock()
        self._headers: Dict[str, str] = {
            "Accept": "application/vnd.github+json",
        }

    def _get_session(self) -> requests.Session:
        """Get or create requests session with optional caching.

        The profile and repository fetches may call this from two threads.

        Returns:
            Configured requests session (cached or regular)
        """
        with self._session_lock:
            if self.session is None:
                self.session = self._create_session()
        return self.session

    def _create_session(self) -> requests.Session:
        """Create a cached or plain session carrying the default headers."""
        session: requests.Session
        if self.config.api.enable_cache:
            CACHE_DIR.mkdir(parents=True, exist_ok=True)
            # 304 is excluded because its empty body breaks JSON decoding
            session = requests_cache.CachedSession(
                cache_name=str(CACHE_DIR / CACHE_NAME),
                backend="sqlite",
                expire_after=self.config.api.cache_expire_after,
                allowable_codes=[200],
                allowable_methods=["GET", "HEAD"],
            )
            logger.debug(
                f"Initialized cached session (expire_after={self.config.api.cache_expire_after}s)"
            )
        else:
            session = requests.Session()
            logger.debug("Initialized regular session (caching disabled)")

        session.headers.update(self._headers)
        return session

    def _build_api_url(self, path: str) -> str:
        """Build full API URL from path.

        Raises:
            ValueError: If path is empty
        """
        if not path or not path.strip():
            raise ValueError("API path cannot be empty")

        base = self.config.server.api_url.rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    def _should_retry(self, exc: Exception) -> bool:
        """Determine if request should be retried based on exception."""
        if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
            return True

        if isinstance(exc, requests.HTTPError) and exc.response is not None:
            return exc.response.status_code in HTTP_STATUS['retryable_errors']

        return False

    def _execute_with_retry(
        self,
        path: str,
        params: Optional[Dict[str, Any]],
        validator: Callable[[Any], bool],
        expected_type_name: str,
    ) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
        """Execute API request with retry logic and response validation.

        Args:
            path: API endpoint path
            params: Optional query parameters
            validator: Function to validate response type
            expected_type_name: Name of expected type for error messages

        Returns:
            Validated JSON response

        Raises:
            ProfileNotFoundError: If the resource does not exist
            ApiError: If request fails after retries or validation fails
        """
        logger.debug(f"Requesting {path} params={params}")
        max_retries = self.config.api.max_retries
        last_exception: Optional[Exception] = None

        for attempt in range(max_retries + 1):
            try:
                response = self._get_session().get(
                    self._build_api_url(path),
                    params=params,
                    timeout=self.config.api.timeout,
                )

                if response.status_code == HTTP_STATUS['not_found']:
                    raise ProfileNotFoundError(
                        f"GitHub resource not found: {path}",
                        status_code=response.status_code,
                    )

                response.raise_for_status()

                if getattr(response, "from_cache", False):
                    logger.debug(f"Response from cache for {path}")

                try:
                    payload = response.json()
                except (json.JSONDecodeError, ValueError) as json_exc:
                    logger.error(
                        f"Failed to decode JSON from {path}. "
                        f"Status: {response.status_code}, "
                        f"Content preview: {response.text[:200]}"
                    )
                    raise ApiError(
                        f"Invalid JSON response from {path}: {json_exc}",
                        status_code=response.status_code,
                    ) from json_exc

                if not validator(payload):
                    raise ApiError(
                        f"Expected {expected_type_name} response from {path}, "
                        f"got {type(payload).__name__}"
                    )

                return payload

            except requests.HTTPError as exc:
                last_exception = exc
                if not self._should_retry(exc):
                    status_code = exc.response.status_code if exc.response is not None else None
                    raise ApiError(f"API request failed: {path}", status_code) from exc

            except requests.RequestException as exc:
                last_exception = exc
                if not self._should_retry(exc):
                    raise ApiError(f"Network error for {path}: {exc}") from exc

            if attempt < max_retries:
                sleep_time = RETRY_CONFIG['backoff_base'] ** attempt  # 1s, 2s, 4s
                logger.debug(
                    f"Retrying {path} after {sleep_time}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                time.sleep(sleep_time)

        raise ApiError(
            f"Request failed after {max_retries} retries: {path}"
        ) from last_exception

    def request_list(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Execute API request expecting list response."""
        result = self._execute_with_retry(
            path=path,
            params=params,
            validator=lambda p: isinstance(p, list),
            expected_type_name="list",
        )
        return result  # type: ignore[return-value]

    def request_json(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Execute API request expecting dict response."""
        result = self._execute_with_retry(
            path=path,
            params=params,
            validator=lambda p: isinstance(p, dict),
            expected_type_name="dict",
        )
        return result  # type: ignore[return-value]

    def close(self) -> None:
        """Close the requests session and release resources."""
        if self.session is not None:
            self.session.close()
            self.session = None

    def __enter__(self) -> "GitHubApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @staticmethod
    def clear_cache() -> bool:
        """Delete the on-disk response cache.

        Returns:
            True if a cache file was removed, False if none existed
        """
        cache_path = CACHE_DIR / f"{CACHE_NAME}.sqlite"
        if not cache_path.exists():
            return False

        cache_path.unlink()
        logger.info(f"Cleared API cache: {cache_path}")
        return True
