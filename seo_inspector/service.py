"""
Analysis service: stored-report lookup in front of fetch + analyze.

A URL that already has a stored report is answered from the store. When
several threads ask for the same new URL at once, only the first one fetches
and analyzes; the others wait on a per-URL lock and get its stored result.
"""

import logging
import threading
from typing import Dict, List, Optional
from urllib.parse import urlparse

from .analysis.analyzer import SEOAnalyzer
from .errors import InvalidURLError
from .storage import ReportStore, StoredReport

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 5


def validate_url(url: object) -> str:
    """Return ``url`` if it is an absolute http(s) URL, else raise InvalidURLError."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError(url)
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidURLError(url) from e
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidURLError(url)
    return url


class AnalysisService:
    def __init__(
        self,
        store: Optional[ReportStore] = None,
        analyzer: Optional[SEOAnalyzer] = None,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ):
        self.store = store if store is not None else ReportStore()
        self.analyzer = analyzer if analyzer is not None else SEOAnalyzer()
        self.recent_limit = recent_limit
        self._url_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, url: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._url_locks.get(url)
            if lock is None:
                lock = self._url_locks[url] = threading.Lock()
            return lock

    def analyze_url(self, url: str) -> StoredReport:
        """
        Return the stored report for ``url``, analyzing it first if needed.

        Raises InvalidURLError, FetchError or ParseError; nothing is stored
        when analysis fails.
        """
        validate_url(url)

        existing = self.store.find_by_url(url)
        if existing is not None:
            logger.info(f"Serving stored report {existing.id} for {url}")
            return existing

        lock = self._lock_for(url)
        with lock:
            try:
                existing = self.store.find_by_url(url)
                if existing is not None:
                    return existing
                report = self.analyzer.analyze_url(url)
                return self.store.save(report)
            finally:
                self._release_lock(url, lock)

    def _release_lock(self, url: str, lock: threading.Lock):
        # Threads already waiting hold their own reference and recheck the store.
        with self._registry_lock:
            if self._url_locks.get(url) is lock:
                del self._url_locks[url]

    def recent(self, limit: Optional[int] = None) -> List[StoredReport]:
        return self.store.recent(limit if limit is not None else self.recent_limit)
