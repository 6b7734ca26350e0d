#!/usr/bin/env python3
"""
Manual scan harness.

Encodes local photos, posts them to a running TenantShield server and prints
the report. Optionally looks up nearby legal clinics for a coordinate.

Usage (from backend/ or project root):
  python scripts/run_scan.py photo1.jpg [photo2.png ...] --details "..." --location "..."
  python scripts/run_scan.py mold.jpg -d "Black mold above shower" -l "Oakland, CA" --lat 37.80 --lng -122.27
  python scripts/run_scan.py mold.jpg -d "..." -l "..." --server http://localhost:5001
"""

import argparse
import json
import sys
from pathlib import Path

import requests

# Add backend to path
backend = Path(__file__).resolve().parent.parent
if str(backend) not in sys.path:
    sys.path.insert(0, str(backend))

DEFAULT_SERVER = "http://localhost:5001"


def section(title: str, char: str = "="):
    """Print a section header."""
    width = 72
    print()
    print(char * width)
    print(f"  {title}")
    print(char * width)


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a tenant-rights scan against a TenantShield server")
    parser.add_argument("photos", nargs="+", help="Image files to analyze")
    parser.add_argument("-d", "--details", required=True, help="Describe the issue")
    parser.add_argument("-l", "--location", required=True, help="City, state or address")
    parser.add_argument("--lat", type=float, help="Latitude for the clinic lookup")
    parser.add_argument("--lng", type=float, help="Longitude for the clinic lookup")
    parser.add_argument("--server", default=DEFAULT_SERVER, help=f"Server base URL (default {DEFAULT_SERVER})")
    args = parser.parse_args()

    from tenantshield.services.intake import build_analysis_request

    try:
        request = build_analysis_request(args.photos, args.details, args.location)
    except (OSError, ValueError) as e:
        print(f"  ERROR: {e}")
        return 1

    server = args.server.rstrip("/")
    section(f"Analyze ({len(request.images)} image(s))")
    resp = requests.post(f"{server}/api/analyze", json=request.model_dump(by_alias=True), timeout=120)
    print(f"  HTTP {resp.status_code}")
    print(json.dumps(resp.json(), indent=2))
    if not resp.ok:
        return 1

    if args.lat is not None and args.lng is not None:
        section(f"Clinics near ({args.lat}, {args.lng})")
        resp = requests.post(f"{server}/clinics", json={"lat": args.lat, "lng": args.lng}, timeout=30)
        print(f"  HTTP {resp.status_code}")
        print(json.dumps(resp.json(), indent=2))
        if not resp.ok:
            return 1

    print("\n  Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
