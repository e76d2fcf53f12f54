#!/usr/bin/env python3
"""Print an NDVI report as JSON.

Usage:
    python run_ndvi.py --lat 18.52 --lon 73.85 --area "North field"

Example:
    python run_ndvi.py --supplier local --raster-dir ./rasters
    python run_ndvi.py --supplier simulated --seed 42 --verbose
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

try:
    import agrondvi
except ImportError:
    print("Error: agrondvi not installed. Run: pip install -e .")
    sys.exit(1)


def main(argv: list[str] | None = None) -> int:
    """Entry point for command-line execution."""
    parser = argparse.ArgumentParser(
        description="Compute NDVI from a red/NIR band pair and print the report",
    )
    parser.add_argument("--lat", type=str, default=None, help="Latitude (WGS84)")
    parser.add_argument("--lon", type=str, default=None, help="Longitude (WGS84)")
    parser.add_argument("--area", type=str, default=None, help="Selected area label")
    parser.add_argument(
        "--supplier",
        type=str,
        default=None,
        help="Band supplier: storage, local or simulated",
    )
    parser.add_argument("--seed", type=int, default=None, help="Simulation seed")
    parser.add_argument(
        "--raster-dir",
        type=str,
        default=None,
        help="Directory with red.tif and nir.tif for the local supplier",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.seed is not None:
        overrides["simulation_seed"] = args.seed
    if args.raster_dir is not None:
        overrides["raster_dir"] = args.raster_dir
    config = agrondvi.Config(**overrides)

    status, body = agrondvi.ndvi_response(
        args.lat,
        args.lon,
        args.area,
        supplier=args.supplier,
        config=config,
    )
    print(json.dumps(body, indent=2))
    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
