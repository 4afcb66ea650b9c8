"""
Map Visualization Module for FeatherGuard

Generates interactive Folium maps of window-strike reports.
"""

import html
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import folium
from folium.plugins import MarkerCluster

from featherguard.core.constants import DEFAULT_MAP_ZOOM, TAIWAN_CENTER
from featherguard.core.models import Report, StrikeStatus

logger = logging.getLogger(__name__)


@dataclass
class MapPoint:
    """One report placed on the map."""
    id: Optional[str]
    latitude: float
    longitude: float
    bird_species: str
    status: Optional[StrikeStatus]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "bird_species": self.bird_species,
            "status": self.status.value if self.status else None,
        }


def map_points(reports: Sequence[Report]) -> List[MapPoint]:
    """Map points for every report that has a location, in input order."""
    return [
        MapPoint(
            id=r.id,
            latitude=r.location.latitude,
            longitude=r.location.longitude,
            bird_species=r.bird_species,
            status=r.status,
        )
        for r in reports
        if r.location is not None
    ]


def get_status_color(status: Optional[StrikeStatus]) -> str:
    """Get marker color based on the bird's condition."""
    colors = {
        StrikeStatus.DEAD: "red",
        StrikeStatus.INJURED: "orange",
        StrikeStatus.STUNNED: "blue",
    }
    return colors.get(status, "gray")


def create_report_map(
    points: Sequence[MapPoint],
    center: Optional[tuple[float, float]] = None,
    zoom: int = DEFAULT_MAP_ZOOM,
    cluster_markers: bool = True,
) -> folium.Map:
    """
    Create an interactive map with report markers.

    Args:
        points: Map points to draw
        center: Map center (lat, lon). Defaults to Taiwan.
        zoom: Initial zoom level (1-18)
        cluster_markers: Cluster markers when zoomed out

    Returns:
        Folium Map object
    """
    report_map = folium.Map(
        location=list(center or TAIWAN_CENTER),
        zoom_start=zoom,
        tiles="OpenStreetMap",
    )

    if not points:
        logger.warning("No report points provided, creating empty map")
        return report_map

    if cluster_markers:
        marker_group = MarkerCluster(name="Window strikes")
    else:
        marker_group = folium.FeatureGroup(name="Window strikes")

    for point in points:
        status_label = point.status.label if point.status else "?"
        popup_html = (
            f"<strong>{html.escape(point.bird_species)}</strong><br>"
            f"{html.escape(status_label)}"
        )

        folium.Marker(
            location=[point.latitude, point.longitude],
            popup=folium.Popup(popup_html, max_width=250),
            tooltip=point.bird_species,
            icon=folium.Icon(color=get_status_color(point.status)),
        ).add_to(marker_group)

    marker_group.add_to(report_map)

    logger.info(f"Created map with {len(points)} report points")
    return report_map


def generate_report_map(
    reports: Sequence[Report],
    output_path: str = "window_strikes.html",
) -> str:
    """
    Render reports to an HTML map file.

    Args:
        reports: Reports to plot (reports without location are skipped)
        output_path: Destination HTML file

    Returns:
        Path of the written file
    """
    report_map = create_report_map(map_points(reports))
    report_map.save(output_path)

    logger.info(f"Map saved to {output_path}")
    return output_path
