"""Caller-held analysis state with last-write-wins semantics."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .analyzer import PortfolioAnalyzer
from .models import AnalysisOutcome

logger = logging.getLogger(__name__)


@dataclass
class AnalysisSession:
    """Track the latest analysis shown to the user.

    Each request takes a ticket from :meth:`begin`. A newer request
    supersedes older ones: when a stale request finishes, its outcome is
    dropped instead of replacing the one on display.
    """

    analyzer: PortfolioAnalyzer
    last_outcome: Optional[AnalysisOutcome] = None
    _latest_ticket: int = field(default=0, init=False, repr=False)
    _pending: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._pending > 0

    def begin(self) -> int:
        """Register a new request and return its ticket."""
        with self._lock:
            self._latest_ticket += 1
            self._pending += 1
            return self._latest_ticket

    def complete(self, ticket: int, outcome: AnalysisOutcome) -> bool:
        """Publish ``outcome`` unless a newer request has started since.

        Returns:
            True if the outcome is now on display, False if it was stale
        """
        with self._lock:
            self._pending = max(0, self._pending - 1)
            if ticket != self._latest_ticket:
                logger.debug(f"Discarding stale analysis result (ticket {ticket})")
                return False
            self.last_outcome = outcome
            return True

    def run(self, raw_input: Optional[str], now: Optional[datetime] = None) -> AnalysisOutcome:
        """Analyze ``raw_input`` and publish the result if still current."""
        ticket = self.begin()
        try:
            outcome = self.analyzer.analyze(raw_input, now)
        except BaseException:
            with self._lock:
                self._pending = max(0, self._pending - 1)
            raise
        self.complete(ticket, outcome)
        return outcome
