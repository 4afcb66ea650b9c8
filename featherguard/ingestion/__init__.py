"""
FeatherGuard - External Service Clients
Species classification and geolocation.
"""

from featherguard.ingestion.gemini_client import GeminiClassifier
from featherguard.ingestion.geolocation_client import (
    GeolocationProvider,
    StaticPosition,
    IPGeolocationClient,
)

__all__ = [
    # Classification
    "GeminiClassifier",
    # Geolocation
    "GeolocationProvider",
    "StaticPosition",
    "IPGeolocationClient",
]
