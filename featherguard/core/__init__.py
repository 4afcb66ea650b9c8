"""
FeatherGuard - Core Utilities
Central configuration, report model, errors and geo helpers.
"""

from featherguard.core.config import settings
from featherguard.core.geo_utils import Coordinates, coordinates_from_columns
from featherguard.core.models import (
    Report,
    PhotoUpload,
    StrikeStatus,
    WindowType,
)
from featherguard.core.exceptions import (
    FeatherGuardError,
    StorageError,
    UploadError,
    RecordStoreError,
    ClassificationError,
    GeolocationError,
    WorkflowError,
    InvalidTransitionError,
)

__all__ = [
    "settings",
    "Coordinates",
    "coordinates_from_columns",
    "Report",
    "PhotoUpload",
    "StrikeStatus",
    "WindowType",
    "FeatherGuardError",
    "StorageError",
    "UploadError",
    "RecordStoreError",
    "ClassificationError",
    "GeolocationError",
    "WorkflowError",
    "InvalidTransitionError",
]
