"""
FeatherGuard - Visualization Module
Report maps.
"""

from featherguard.visualization.map_generator import (
    MapPoint,
    map_points,
    create_report_map,
    generate_report_map,
)

__all__ = [
    "MapPoint",
    "map_points",
    "create_report_map",
    "generate_report_map",
]
