#!/usr/bin/env python3
"""
FeatherGuard - Generate Window-Strike Map
Fetches all reports from the configured record store and writes an
interactive map plus a short summary.
"""
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

# Settings read the environment at import time
load_dotenv()

from featherguard.analysis.statistics import summarize
from featherguard.core.config import get_settings
from featherguard.core.exceptions import FeatherGuardError
from featherguard.core.logging import setup_logging
from featherguard.crowdsource.factory import create_record_store
from featherguard.visualization.map_generator import generate_report_map, map_points


async def fetch_reports():
    record_store = create_record_store(get_settings())
    return await record_store.list_all()


def main():
    setup_logging()

    print("=" * 60)
    print("FeatherGuard - Generating Window-Strike Map")
    print("=" * 60)

    try:
        reports = asyncio.run(fetch_reports())
    except FeatherGuardError as e:
        print(f"ERROR: could not load reports: {e}")
        sys.exit(1)

    print(f"\nTotal reports found: {len(reports)}")

    summary = summarize(reports)
    if summary is None:
        print("No reports yet.")
    else:
        print("\nBy status:")
        for status, count in summary.status_counts.items():
            print(f"  - {status:<10} {count}")
        print("\nTop species:")
        for rank, (species, count) in enumerate(summary.top_species, start=1):
            print(f"  {rank}. {species} ({count})")

    points = map_points(reports)
    print(f"\nReports with location: {len(points)}")

    output_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "window_strike_map.html")
    generate_report_map(reports, output_path)

    print(f"\nMap saved to: {output_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
