"""
Pytest configuration and fixtures
"""
import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from featherguard.core.geo_utils import Coordinates
from featherguard.core.models import PhotoUpload, Report, StrikeStatus, WindowType


@pytest.fixture
def sample_photo():
    """Small JPEG-looking upload."""
    return PhotoUpload(
        filename="IMG_0042.JPG",
        data=b"\xff\xd8\xff\xe0fake-jpeg-bytes",
        content_type="image/jpeg",
    )


@pytest.fixture
def sample_reports():
    """Persisted reports, newest first."""
    return [
        Report(
            id="3",
            reporter_name="小林",
            bird_species="五色鳥 (95%)",
            status=StrikeStatus.DEAD,
            window_type=WindowType.REFLECTIVE_GLASS,
            photo_url="https://example.supabase.co/storage/v1/object/public/bird-photos/c.jpg",
            location=Coordinates(25.0330, 121.5654),
            created_at=datetime(2026, 3, 3, 8, 0, tzinfo=timezone.utc),
        ),
        Report(
            id="2",
            bird_species="麻雀 (80%)",
            status=StrikeStatus.STUNNED,
            photo_url="https://example.supabase.co/storage/v1/object/public/bird-photos/b.jpg",
            location=None,
            created_at=datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc),
        ),
        Report(
            id="1",
            bird_species="五色鳥 (60%)",
            status=StrikeStatus.INJURED,
            window_type=WindowType.MIRRORED,
            photo_url="https://example.supabase.co/storage/v1/object/public/bird-photos/a.jpg",
            location=Coordinates(24.1477, 120.6736),
            created_at=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def supabase_row():
    """Row as returned by PostgREST for a report written by the old app."""
    return {
        "id": 17,
        "reporter_name": "阿明",
        "bird_species": "綠繡眼 (88%)",
        "status": "暈眩",
        "window_type": "透明玻璃",
        "photo_url": "https://example.supabase.co/storage/v1/object/public/bird-photos/x.png",
        "latitude": 0,
        "longitude": 0,
        "description": "一樓大廳",
        "created_at": "2026-02-14T09:30:00.123456Z",
    }
