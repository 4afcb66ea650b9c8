"""
Database module for FeatherGuard
SQLAlchemy persistence for window-strike reports
"""

from .connection import DatabaseConnection
from .models import Base, ReportRecord
from .record_store import DatabaseRecordStore

__all__ = [
    "DatabaseConnection",
    "Base",
    "ReportRecord",
    "DatabaseRecordStore",
]
