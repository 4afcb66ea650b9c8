"""
Workflow assembly from settings
"""

import logging
from typing import Optional

from featherguard.core.config import Settings, settings as default_settings
from featherguard.crowdsource.collection import ReportCollection
from featherguard.crowdsource.workflow import SubmissionWorkflow
from featherguard.ingestion.gemini_client import GeminiClassifier
from featherguard.ingestion.geolocation_client import IPGeolocationClient
from featherguard.storage.base import ObjectStore, RecordStore
from featherguard.storage.memory import InMemoryObjectStore, InMemoryRecordStore
from featherguard.storage.supabase import SupabaseObjectStore, SupabaseRecordStore

logger = logging.getLogger(__name__)


def _require_supabase(config: Settings) -> None:
    if not config.supabase_configured:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set for the supabase backend")


def create_object_store(config: Settings) -> ObjectStore:
    """Photo store selected by `object_store_backend`."""
    backend = config.object_store_backend.lower()

    if backend == "supabase":
        _require_supabase(config)
        return SupabaseObjectStore(
            config.supabase_url,
            config.supabase_key,
            bucket=config.photo_bucket,
            timeout=config.storage_timeout_seconds,
        )
    if backend == "memory":
        return InMemoryObjectStore(bucket=config.photo_bucket)

    raise ValueError(f"Unknown object store backend: {config.object_store_backend}")


def create_record_store(config: Settings) -> RecordStore:
    """Report store selected by `record_store_backend`."""
    backend = config.record_store_backend.lower()

    if backend == "supabase":
        _require_supabase(config)
        return SupabaseRecordStore(
            config.supabase_url,
            config.supabase_key,
            table=config.reports_table,
            timeout=config.storage_timeout_seconds,
        )
    if backend == "database":
        from featherguard.database import DatabaseConnection, DatabaseRecordStore

        db = DatabaseConnection(config.database_url)
        db.create_tables()
        return DatabaseRecordStore(db)
    if backend == "memory":
        return InMemoryRecordStore()

    raise ValueError(f"Unknown record store backend: {config.record_store_backend}")


def create_workflow(config: Optional[Settings] = None) -> SubmissionWorkflow:
    """
    Build a submission workflow wired to the configured services.

    Args:
        config: Settings to use, defaults to the global settings

    Returns:
        SubmissionWorkflow
    """
    config = config or default_settings

    record_store = create_record_store(config)
    workflow = SubmissionWorkflow(
        object_store=create_object_store(config),
        classifier=GeminiClassifier(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            timeout=config.classification_timeout_seconds,
        ),
        record_store=record_store,
        geolocator=IPGeolocationClient(timeout=config.geolocation_timeout_seconds),
        collection=ReportCollection(record_store),
        fallback_text=config.classification_fallback_text,
        not_a_bird_text=config.not_a_bird_text,
        species_language=config.species_language,
    )

    logger.info(
        f"Workflow created: photos={config.object_store_backend}, "
        f"reports={config.record_store_backend}, "
        f"classifier={'gemini' if config.gemini_api_key else 'unconfigured'}"
    )
    return workflow
