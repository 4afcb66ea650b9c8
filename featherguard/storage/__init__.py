"""
FeatherGuard - Storage Module
Photo object stores and report record stores.
"""

from featherguard.storage.base import ObjectStore, RecordStore
from featherguard.storage.memory import InMemoryObjectStore, InMemoryRecordStore
from featherguard.storage.supabase import (
    SupabaseClient,
    SupabaseObjectStore,
    SupabaseRecordStore,
)

__all__ = [
    "ObjectStore",
    "RecordStore",
    "InMemoryObjectStore",
    "InMemoryRecordStore",
    "SupabaseClient",
    "SupabaseObjectStore",
    "SupabaseRecordStore",
]
