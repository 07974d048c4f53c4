"""
In-memory report store.

Keeps completed analyses keyed by id, assigning ids and creation times on
save. Lookups by URL return the earliest stored report for that URL.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .analysis.models import AnalysisReport

logger = logging.getLogger(__name__)


class StoredReport(AnalysisReport):
    id: int
    created_at: datetime


class ReportStore:
    def __init__(self):
        self._reports: Dict[int, StoredReport] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def save(self, report: AnalysisReport) -> StoredReport:
        with self._lock:
            stored = StoredReport(
                **dict(report),
                id=self._next_id,
                created_at=datetime.now(timezone.utc),
            )
            self._reports[stored.id] = stored
            self._next_id += 1
        logger.info(f"Stored report {stored.id} for {stored.url}")
        return stored

    def find_by_url(self, url: str) -> Optional[StoredReport]:
        with self._lock:
            for report in self._reports.values():
                if report.url == url:
                    return report
        return None

    def recent(self, limit: int) -> List[StoredReport]:
        """Newest first; ties on created_at fall back to the higher id."""
        with self._lock:
            reports = list(self._reports.values())
        reports.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return reports[:limit]

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)
