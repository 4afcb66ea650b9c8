"""
FeatherGuard - Constants and Reference Data
Static values used throughout the application.
"""

from typing import Tuple

# =============================================================================
# MAP
# =============================================================================

# Default map center (Taiwan)
TAIWAN_CENTER: Tuple[float, float] = (23.5, 121.0)
DEFAULT_MAP_ZOOM = 7

# =============================================================================
# STATISTICS
# =============================================================================

UNKNOWN_STATUS_KEY = "unknown"
UNKNOWN_SPECIES_KEY = "unknown species"
TOP_SPECIES_LIMIT = 5
LATEST_REPORTS_LIMIT = 5

# =============================================================================
# CLASSIFICATION
# =============================================================================

SPECIES_PROMPT_TEMPLATE = (
    "This is a photo of a bird that hit a window. Identify the species. "
    "Reply only with the bird's common name in {language} followed by your "
    "confidence, formatted as: name (confidence%). Example: 五色鳥 (95%). "
    "If the subject is not a bird, reply exactly: {not_a_bird}"
)

# Confidence suffix of a classifier reply, e.g. "五色鳥 (95%)"
CONFIDENCE_PATTERN = r"\(\s*(\d{1,3}(?:\.\d+)?)\s*%\s*\)"

# =============================================================================
# STORAGE
# =============================================================================

DEFAULT_CONTENT_TYPE = "application/octet-stream"
