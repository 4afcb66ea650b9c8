"""
Snapshot of persisted reports
Refetched after every successful submission.
"""

import logging
from typing import List, Optional

from featherguard.analysis.statistics import StatisticsSummary, summarize
from featherguard.core.models import Report
from featherguard.storage.base import RecordStore

logger = logging.getLogger(__name__)


class ReportCollection:
    """
    Newest-first list of reports plus the summary derived from it.

    The summary is recomputed from scratch on every refresh.
    """

    def __init__(self, record_store: RecordStore):
        self.record_store = record_store
        self._reports: List[Report] = []
        self._summary: Optional[StatisticsSummary] = None

    @property
    def reports(self) -> List[Report]:
        return list(self._reports)

    @property
    def summary(self) -> Optional[StatisticsSummary]:
        return self._summary

    async def refresh(self) -> List[Report]:
        """
        Reload the snapshot from the record store.

        A failing fetch propagates and keeps the previous snapshot.
        """
        reports = await self.record_store.list_all()
        self._reports = reports
        self._summary = summarize(reports)

        logger.info(f"Report collection refreshed: {len(reports)} reports")
        return self.reports

    def __len__(self) -> int:
        return len(self._reports)
