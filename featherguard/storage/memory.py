"""
In-memory stores for development and tests
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List

from featherguard.core.exceptions import UploadError
from featherguard.core.models import Report

logger = logging.getLogger(__name__)


class InMemoryObjectStore:
    """Keeps uploaded blobs in a dict; URLs use the memory:// scheme."""

    def __init__(self, bucket: str = "bird-photos"):
        self.bucket = bucket
        self.objects: Dict[str, bytes] = {}

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        if name in self.objects:
            raise UploadError(f"Object already exists: {name}")

        self.objects[name] = data
        logger.debug(f"Stored {len(data)} bytes as {name} ({content_type})")

        return self.public_url(name)

    def public_url(self, name: str) -> str:
        return f"memory://{self.bucket}/{name}"


class InMemoryRecordStore:
    """Append-only report list with sequential ids."""

    def __init__(self):
        self._reports: List[Report] = []
        self._next_id = 1

    async def insert(self, report: Report) -> Report:
        stored = replace(
            report,
            id=str(self._next_id),
            created_at=datetime.now(timezone.utc),
        )
        self._next_id += 1
        self._reports.append(stored)

        logger.info(f"Report {stored.id} stored in memory")

        return replace(stored)

    async def list_all(self) -> List[Report]:
        # Insertion order is creation order; newest first
        return [replace(r) for r in reversed(self._reports)]

    def __len__(self) -> int:
        return len(self._reports)
