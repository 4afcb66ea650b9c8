"""
Storage interfaces
Object store for photos and record store for reports.
"""

from typing import List, Protocol

from featherguard.core.models import Report


class ObjectStore(Protocol):
    """Durable blob storage with public retrieval addresses."""

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        """
        Store a blob under a caller-chosen name.

        Returns:
            Public URL of the stored blob

        Raises:
            UploadError: If the blob could not be stored
        """
        ...


class RecordStore(Protocol):
    """Append-only collection of submitted reports."""

    async def insert(self, report: Report) -> Report:
        """
        Persist a draft report.

        Returns:
            A new Report carrying the assigned id and created_at

        Raises:
            RecordStoreError: If the write failed
        """
        ...

    async def list_all(self) -> List[Report]:
        """All reports, newest first."""
        ...
