#!/usr/bin/env python3
"""
Example: Validate an earthquake feed with per-column rules.

Builds a small USGS-style earthquake table and checks every row for
identifiers, coordinates, magnitudes and event types.

Usage:
    python examples/validate_earthquakes.py
"""

import logging
import sys
from pathlib import Path

import pandas as pd

# Allow imports from src/
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from fieldgate import FrameValidator

RULES = {
    'id': 'nonzero | matches(^[a-z]{2}[0-9a-z]{8}$)',
    'latitude': 'lat',
    'longitude': 'lon',
    'depth_km': 'gte(0) | lte(700)',
    'magnitude': 'gte(0) | lt(10)',
    'type': 'in(earthquake,explosion,quarry blast)',
    'status': 'notin(deleted)',
}


def build_feed() -> pd.DataFrame:
    """A handful of events, three of them with data problems."""
    return pd.DataFrame({
        'id': ['us7000l1aa', 'us7000l1bb', 'us7000l1cc', '', 'us7000l1ee', 'us7000l1ff'],
        'place': [
            '100 km S of Honshu, Japan',
            '50 km NE of Los Angeles, CA',
            '20 km W of Lima, Peru',
            'Unknown',
            '10 km N of Anchorage, AK',
            'Southern Alaska',
        ],
        'latitude': [35.68, 34.05, -12.05, 12.0, 95.2, 61.2],
        'longitude': [139.69, -118.24, -77.04, 44.1, -149.9, -150.0],
        'depth_km': [30.0, 12.5, 45.0, 10.0, 33.0, 15.0],
        'magnitude': [7.1, 5.5, 4.8, 3.2, 4.1, None],
        'type': ['earthquake', 'earthquake', 'quarry blast', 'earthquake', 'earthquake', 'earthquake'],
        'status': ['reviewed', 'automatic', 'reviewed', 'reviewed', 'automatic', 'reviewed'],
    })


def main():
    logging.basicConfig(level=logging.INFO, format='%(name)s %(levelname)s %(message)s')

    df = build_feed()
    print(f"Validating {len(df)} events against {len(RULES)} column rules...")

    v = FrameValidator("usgs_earthquakes", RULES)
    report = v.validate(df)
    report.print_summary()
    report.print_failures()

    clean = df.drop(index=[f.index for f in report.failures])
    print(f"Clean events ({len(clean)}):")
    print(clean[['id', 'place', 'magnitude']].to_string(index=False))
    print()


if __name__ == '__main__':
    main()
