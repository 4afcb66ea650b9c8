"""
Window-strike report model
Shared by the submission workflow, the stores and the statistics.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from featherguard.core.constants import DEFAULT_CONTENT_TYPE
from featherguard.core.geo_utils import Coordinates, coordinates_from_columns

logger = logging.getLogger(__name__)


class StrikeStatus(str, Enum):
    """Condition of the bird when it was found."""
    DEAD = "dead"
    STUNNED = "stunned"
    INJURED = "injured"

    @property
    def label(self) -> str:
        """Display label used by the mobile front end."""
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["StrikeStatus"]:
        """Match a stored value or display label, None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for member in cls:
            if value == member.value or value == member.label:
                return member
        return None


class WindowType(str, Enum):
    """Kind of glass the bird hit."""
    CLEAR_GLASS = "clear_glass"
    REFLECTIVE_GLASS = "reflective_glass"
    MIRRORED = "mirrored"

    @property
    def label(self) -> str:
        """Display label used by the mobile front end."""
        return _WINDOW_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["WindowType"]:
        """Match a stored value or display label, None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for member in cls:
            if value == member.value or value == member.label:
                return member
        return None


_STATUS_LABELS = {
    StrikeStatus.DEAD: "死亡",
    StrikeStatus.STUNNED: "暈眩",
    StrikeStatus.INJURED: "受傷",
}

_WINDOW_LABELS = {
    WindowType.CLEAR_GLASS: "透明玻璃",
    WindowType.REFLECTIVE_GLASS: "反光玻璃",
    WindowType.MIRRORED: "鏡面",
}


@dataclass
class PhotoUpload:
    """Photo selected by the user, as raw bytes."""
    filename: str
    data: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Report:
    """
    Window-strike report.

    A draft has neither id nor created_at; both are assigned by the
    record store when the report is inserted.
    """
    reporter_name: str = ""
    bird_species: str = ""
    status: Optional[StrikeStatus] = StrikeStatus.DEAD
    window_type: WindowType = WindowType.CLEAR_GLASS
    photo_url: str = ""
    location: Optional[Coordinates] = None
    description: str = ""

    # Assigned on persistence
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None and self.created_at is not None

    @property
    def has_location(self) -> bool:
        return self.location is not None

    def to_record(self) -> Dict[str, Any]:
        """Columns written on insert (id and created_at excluded)."""
        return {
            "reporter_name": self.reporter_name,
            "bird_species": self.bird_species,
            "status": self.status.value if self.status else None,
            "window_type": self.window_type.value,
            "photo_url": self.photo_url,
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "description": self.description,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = self.to_record()
        data["id"] = self.id
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["status_label"] = self.status.label if self.status else None
        data["window_type_label"] = self.window_type.label
        return data

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "Report":
        """
        Build a report from a stored row.

        Unknown status values are kept as None so listings never fail on a
        single bad row; unknown window types fall back to the default.

        Args:
            row: Column mapping as returned by a record store

        Returns:
            Report instance
        """
        status = StrikeStatus.parse(row.get("status"))
        if status is None and row.get("status") is not None:
            logger.warning(f"Unrecognized status in report {row.get('id')}: {row.get('status')!r}")

        window_type = WindowType.parse(row.get("window_type"))
        if window_type is None:
            if row.get("window_type") is not None:
                logger.warning(
                    f"Unrecognized window type in report {row.get('id')}: {row.get('window_type')!r}"
                )
            window_type = WindowType.CLEAR_GLASS

        row_id = row.get("id")

        return cls(
            reporter_name=row.get("reporter_name") or "",
            bird_species=row.get("bird_species") or "",
            status=status,
            window_type=window_type,
            photo_url=row.get("photo_url") or "",
            location=coordinates_from_columns(row.get("latitude"), row.get("longitude")),
            description=row.get("description") or "",
            id=str(row_id) if row_id is not None else None,
            created_at=parse_timestamp(row.get("created_at")),
        )


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from a database or REST row."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp: {value!r}")
        return None
