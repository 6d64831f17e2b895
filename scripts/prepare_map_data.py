"""
Preprocessor: facility CSV -> JSON data files for the map frontend.

Generates:
  map/public/data/facilities.json  — cleaned facility array
  map/public/data/analysis.json    — summary, region risk, specialty distribution, data quality

Run: python scripts/prepare_map_data.py
     python scripts/prepare_map_data.py --csv export.csv --out /tmp/data

Coordinates are not included; the frontend resolves region/city names itself.
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.facility_insights.config import LOG_FORMAT, LOG_LEVEL, MAP_DATA_DIR
from src.facility_insights.errors import format_load_error
from src.facility_insights.export import write_map_data
from src.facility_insights.pipeline import load_dataset


def main():
    parser = argparse.ArgumentParser(description="Generate map data (facilities.json, analysis.json) from the facility CSV.")
    parser.add_argument("--csv", type=Path, default=None, help="Path to CSV (default: FACILITY_CSV / data/...)")
    parser.add_argument("--out", type=Path, default=MAP_DATA_DIR, help=f"Output directory (default: {MAP_DATA_DIR})")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else LOG_LEVEL, format=LOG_FORMAT)

    print("Loading facilities from CSV...")
    try:
        result = load_dataset(args.csv)
    except Exception as e:
        print(f"  Could not load dataset: {format_load_error(e)}")
        sys.exit(1)
    print(f"  Loaded {len(result.facilities)} facilities, {len(result.regions)} regions")

    counts = result.quality.risk_level_counts
    print("  Risk tiers: " + ", ".join(f"{level}={n}" for level, n in counts.items()))

    facilities_path, analysis_path = write_map_data(result, args.out)
    print(f"  Wrote {facilities_path.name} and {analysis_path.name} to {args.out}")
    print("Done!")


if __name__ == "__main__":
    main()
