# run_scan.py
import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the Python path to ensure imports work correctly
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from hazardscan.scan_report.aggregator import chart_series
from hazardscan.scan_report.config import ScanConfig
from hazardscan.scan_report.core import ReportSession
from hazardscan.scan_report.data_models import ScanRequest
from hazardscan.scan_report.exceptions import HazardScanError, NetworkError
from hazardscan.scan_report.visualization import MapVisualizer

def parse_args():
    parser = argparse.ArgumentParser(description="Scan for wildlife hazards around an airport.")
    parser.add_argument('--icao', default="", help="4-letter ICAO code, e.g. EGLL")
    parser.add_argument('--lat', default="", help="Latitude for a custom location")
    parser.add_argument('--lon', default="", help="Longitude for a custom location")
    parser.add_argument('--radius', default="", help="Scan radius in km (default 13)")
    parser.add_argument('--min-area', default="", help="Minimum feature area in m² (default 5000)")
    parser.add_argument('--hide', action='append', default=[],
                        help="Category to hide: water, veg, waste or other (repeatable)")
    parser.add_argument('--out', default="output", help="Directory for the map and exports")
    return parser.parse_args()

async def run(args) -> int:
    config = ScanConfig.from_env()
    session = ReportSession(config=config)
    mode = 'coords' if args.lat or args.lon else 'icao'
    request = ScanRequest.from_form(mode, icao=args.icao, lat=args.lat, lon=args.lon,
                                    radius=args.radius, min_area=args.min_area)

    request.validate()

    print("--- Starting Hazard Scan ---")
    print(f"Target: {request.location_token()}, "
          f"Radius: {request.radius_km}km, Min area: {request.min_area_sq_m}m²")
    print("-" * 40)

    try:
        result = await session.start_scan(request)
    except NetworkError as e:
        print(f"\n[!] {session.status_message}")
        print(f"    {e.hint}")
        return 1

    print(f"\n{session.status_message}")
    if result.skipped_count:
        print(f"  ({result.skipped_count} features had unsupported geometry and were pinned to the ARP)")

    for key in args.hide:
        session.toggle_category(key)
    views = session.current_views()

    print(f"\nActive features: {views.stats.total_count}, "
          f"total area: {round(views.stats.total_area_sq_m):,} m²")
    for row in chart_series(views.stats)['categories']:
        print(f"  > {row['label']:<12} {row['value']}")
    for row in chart_series(views.stats)['risk']:
        print(f"  > Risk {row['label']:<7} {row['value']}")

    print("\nTop hazards:")
    for i, feature in enumerate(views.ranked[:10]):
        print(f"  #{i+1}: {feature.label:<12} | Risk {feature.risk_score:>2} | "
              f"{feature.distance_km:6.2f} km | {feature.name or 'Unnamed'}")

    os.makedirs(args.out, exist_ok=True)
    MapVisualizer(tiles=config.map_tiles, zoom_start=config.map_zoom_start).save(
        views.layers, os.path.join(args.out, "hazard_map.html")
    )
    for artifact in (session.export_kml(), session.export_csv()):
        path = os.path.join(args.out, artifact.filename)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(artifact.content)
        print(f"Saved {path}")

    print("\n--- Scan Complete ---")
    return 0

def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        sys.exit(asyncio.run(run(parse_args())))
    except HazardScanError as e:
        print(f"\n[!] {e}")
        sys.exit(2)

if __name__ == "__main__":
    main()
