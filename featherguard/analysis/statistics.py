"""
Report statistics for FeatherGuard
Aggregate counts over the full report collection.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from featherguard.core.constants import (
    LATEST_REPORTS_LIMIT,
    TOP_SPECIES_LIMIT,
    UNKNOWN_SPECIES_KEY,
    UNKNOWN_STATUS_KEY,
)
from featherguard.core.models import Report, StrikeStatus

logger = logging.getLogger(__name__)

ReportLike = Union[Report, Mapping[str, Any]]


@dataclass
class StatisticsSummary:
    """Counts derived from the report collection."""
    total: int
    status_counts: Dict[str, int] = field(default_factory=dict)
    species_counts: Dict[str, int] = field(default_factory=dict)
    top_species: List[Tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "status_counts": dict(self.status_counts),
            "species_counts": dict(self.species_counts),
            "top_species": [
                {"species": species, "count": count}
                for species, count in self.top_species
            ],
        }


def _get(report: ReportLike, name: str) -> Any:
    if isinstance(report, Mapping):
        return report.get(name)
    return getattr(report, name, None)


def status_key(value: Any) -> str:
    """Bucket key for a status; unset or unrecognized -> "unknown"."""
    status = StrikeStatus.parse(value)
    return status.value if status else UNKNOWN_STATUS_KEY


def normalize_species(text: Any) -> str:
    """
    Grouping key for a species string.

    "五色鳥 (95%)" and "五色鳥 (60%)" both become "五色鳥".

    Args:
        text: Species text as stored on the report

    Returns:
        Text before the first "(", trimmed, or the unknown-species key
    """
    if not isinstance(text, str):
        return UNKNOWN_SPECIES_KEY
    key = text.split("(", 1)[0].strip()
    return key or UNKNOWN_SPECIES_KEY


def summarize(
    reports: Sequence[ReportLike],
    top_n: int = TOP_SPECIES_LIMIT
) -> Optional[StatisticsSummary]:
    """
    Summarize a report collection.

    Args:
        reports: Reports or raw rows, in collection order
        top_n: Number of species kept in the ranking

    Returns:
        StatisticsSummary, or None for an empty collection
    """
    total = len(reports)
    if total == 0:
        return None

    status_counts: Dict[str, int] = {}
    species_counts: Dict[str, int] = {}

    for report in reports:
        status = status_key(_get(report, "status"))
        status_counts[status] = status_counts.get(status, 0) + 1

        species = normalize_species(_get(report, "bird_species"))
        species_counts[species] = species_counts.get(species, 0) + 1

    # dicts keep first-seen order and sorted() is stable, so ties stay in input order
    ranked = sorted(species_counts.items(), key=lambda item: item[1], reverse=True)

    logger.debug(f"Summarized {total} reports into {len(species_counts)} species")

    return StatisticsSummary(
        total=total,
        status_counts=status_counts,
        species_counts=species_counts,
        top_species=ranked[:top_n],
    )


def latest_reports(
    reports: Sequence[Report],
    limit: int = LATEST_REPORTS_LIMIT
) -> List[Report]:
    """Newest reports of a newest-first snapshot."""
    return list(reports[:limit])
