"""
FeatherGuard - Analysis Module
Statistics over submitted reports.
"""

from featherguard.analysis.statistics import (
    StatisticsSummary,
    summarize,
    normalize_species,
    status_key,
    latest_reports,
)

__all__ = [
    "StatisticsSummary",
    "summarize",
    "normalize_species",
    "status_key",
    "latest_reports",
]
