"""
Tests for report maps
"""
import pytest

import folium

import sys
sys.path.insert(0, '.')

from featherguard.core.models import StrikeStatus
from featherguard.visualization.map_generator import (
    create_report_map,
    generate_report_map,
    get_status_color,
    map_points,
)


class TestMapPoints:
    """Test report to map point projection."""

    def test_skips_reports_without_location(self, sample_reports):
        points = map_points(sample_reports)

        assert [p.id for p in points] == ["3", "1"]
        assert points[0].latitude == 25.0330
        assert points[0].bird_species == "五色鳥 (95%)"

    def test_to_dict(self, sample_reports):
        data = map_points(sample_reports)[1].to_dict()
        assert data["status"] == "injured"

    def test_empty(self):
        assert map_points([]) == []


class TestReportMap:
    """Test Folium map generation."""

    def test_status_colors(self):
        assert get_status_color(StrikeStatus.DEAD) == "red"
        assert get_status_color(None) == "gray"

    def test_empty_map_centered_on_taiwan(self):
        report_map = create_report_map([])

        assert isinstance(report_map, folium.Map)
        assert report_map.location == [23.5, 121.0]

    def test_markers_in_html(self, sample_reports):
        html = create_report_map(map_points(sample_reports), cluster_markers=False).get_root().render()

        assert "五色鳥 (60%)" in html
        assert "受傷" in html

    def test_generate_file(self, sample_reports, tmp_path):
        output = tmp_path / "strikes.html"

        path = generate_report_map(sample_reports, str(output))

        assert path == str(output)
        assert output.exists()
        assert output.stat().st_size > 0
