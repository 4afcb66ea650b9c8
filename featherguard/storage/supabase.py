"""
Supabase clients for FeatherGuard

Photos go to Supabase Storage, reports to a Postgres table exposed by
PostgREST. Both talk plain HTTP through httpx.

API Documentation:
- https://supabase.com/docs/reference/api/storage
- https://postgrest.org/en/stable/references/api.html
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from featherguard.core.exceptions import RecordStoreError, UploadError
from featherguard.core.models import Report

logger = logging.getLogger(__name__)


class SupabaseClient:
    """
    Shared HTTP plumbing for Supabase services.

    Usage:
        async with SupabaseObjectStore(url, key) as store:
            public_url = await store.upload("a1b2.jpg", data, "image/jpeg")
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize Supabase client.

        Args:
            url: Project URL, e.g. https://xyz.supabase.co
            api_key: anon or service-role key
            timeout: HTTP request timeout in seconds
            client: Pre-built httpx client (tests inject a mock transport)
        """
        if not url or not api_key:
            raise ValueError("Supabase URL and API key are required")

        self.base_url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        headers.update(extra)
        return headers


class SupabaseObjectStore(SupabaseClient):
    """Photo storage in a public Supabase Storage bucket."""

    def __init__(self, url: str, api_key: str, bucket: str = "bird-photos", **kwargs):
        super().__init__(url, api_key, **kwargs)
        self.bucket = bucket

    def public_url(self, name: str) -> str:
        """Public retrieval address of an object in the bucket."""
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{name}"

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        """
        Upload a blob without overwriting existing objects.

        Args:
            name: Object name inside the bucket
            data: Blob bytes
            content_type: MIME type stored with the object

        Returns:
            Public URL of the uploaded object
        """
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{name}"

        logger.info(f"Uploading {len(data)} bytes to {self.bucket}/{name}")

        try:
            response = await self._client.post(
                url,
                content=data,
                headers=self._headers(**{"Content-Type": content_type, "x-upsert": "false"}),
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UploadError(f"Upload of {name} failed: {e}") from e

        return self.public_url(name)


class SupabaseRecordStore(SupabaseClient):
    """Report table accessed through PostgREST."""

    def __init__(self, url: str, api_key: str, table: str = "reports", **kwargs):
        super().__init__(url, api_key, **kwargs)
        self.table = table

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    async def insert(self, report: Report) -> Report:
        """
        Insert one report and return the stored row.

        Args:
            report: Draft report

        Returns:
            Report with id and created_at assigned by the database
        """
        try:
            response = await self._client.post(
                self.table_url,
                json=[report.to_record()],
                headers=self._headers(Prefer="return=representation"),
            )
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RecordStoreError(f"Insert into {self.table} failed: {e}") from e

        if not isinstance(rows, list) or not rows or not isinstance(rows[0], dict):
            raise RecordStoreError(f"Insert into {self.table} returned no row")

        stored = Report.from_record(rows[0])
        logger.info(f"Report {stored.id} inserted into {self.table}")

        return stored

    async def list_all(self) -> List[Report]:
        """Fetch every report, newest first."""
        try:
            response = await self._client.get(
                self.table_url,
                params={"select": "*", "order": "created_at.desc"},
                headers=self._headers(),
            )
            response.raise_for_status()
            rows: Any = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RecordStoreError(f"Listing {self.table} failed: {e}") from e

        if not isinstance(rows, list):
            raise RecordStoreError(f"Unexpected payload from {self.table}")

        reports = [Report.from_record(row) for row in rows if isinstance(row, dict)]
        logger.info(f"Retrieved {len(reports)} reports")

        return reports
