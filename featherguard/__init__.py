"""
FeatherGuard - Urban window-strike reporting.

Citizens photograph birds that hit windows; reports are classified,
geotagged, stored and summarized.
"""

__version__ = "0.1.0"
