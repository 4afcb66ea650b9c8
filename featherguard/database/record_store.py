"""
SQL-backed record store
Runs blocking SQLAlchemy sessions in a worker thread.
"""

import asyncio
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from featherguard.core.exceptions import RecordStoreError
from featherguard.core.models import Report
from .connection import DatabaseConnection
from .models import ReportRecord

logger = logging.getLogger(__name__)


class DatabaseRecordStore:
    """Record store on top of a DatabaseConnection."""

    def __init__(self, db: DatabaseConnection):
        self.db = db

    async def insert(self, report: Report) -> Report:
        return await asyncio.to_thread(self._insert, report)

    async def list_all(self) -> List[Report]:
        return await asyncio.to_thread(self._list_all)

    def _insert(self, report: Report) -> Report:
        try:
            with self.db.get_session() as session:
                record = ReportRecord.from_report(report)
                session.add(record)
                session.flush()
                stored = record.to_report()
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Insert failed: {e}") from e

        logger.info(f"Report {stored.id} inserted")
        return stored

    def _list_all(self) -> List[Report]:
        query = select(ReportRecord).order_by(
            ReportRecord.created_at.desc(),
            ReportRecord.id.desc(),
        )
        try:
            with self.db.get_session() as session:
                return [record.to_report() for record in session.scalars(query)]
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Listing reports failed: {e}") from e
