# annotate_logs.py
import os
import sys
import json
import logging
import argparse

# Add the project root to the Python path
project_root = os.path.dirname(os.path.abspath(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from flightmapper.airports import AirportConstants, AirportIndex, CatalogLoader, CatalogLoadError
from flightmapper.labels import LabelLayout
from flightmapper.track import AnnotationConfig, TrackAnnotator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Annotate flight-track CSV logs with airports, stops and label positions.")
    parser.add_argument("logs", nargs="+", help="Flight log CSV files (log_YYYYMMDD_HHMMSS_CODE.csv)")
    parser.add_argument("--airports", help="Local OurAirports airports.csv used when the remote catalog is unavailable")
    parser.add_argument("--offline", action="store_true", help="Never fetch the remote airport catalog")
    parser.add_argument("--agl", type=float, default=AnnotationConfig.agl_threshold_ft, help="AGL threshold in feet")
    parser.add_argument("--speed", type=float, default=AnnotationConfig.speed_threshold_kts, help="Ground speed threshold in knots")
    parser.add_argument("--epsilon", type=float, default=AnnotationConfig.simplify_epsilon_km, help="Simplification tolerance in km")
    parser.add_argument("--max-radius", type=float, default=None, help="Cap on nearest-airport search radius in km")
    parser.add_argument("--zoom", type=float, default=AnnotationConfig.zoom, help="Map zoom level used for label layout")
    parser.add_argument("--json", dest="json_out", help="Write annotations to this JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    config = AnnotationConfig(
        agl_threshold_ft=args.agl,
        speed_threshold_kts=args.speed,
        simplify_epsilon_km=args.epsilon,
        max_search_radius_km=args.max_radius,
        zoom=args.zoom
    )

    loader = CatalogLoader(local_path=args.airports, remote_url=None if args.offline else AirportConstants.REMOTE_CATALOG_URL)
    try:
        index = AirportIndex.from_loader(loader, max_radius_km=config.max_search_radius_km)
    except CatalogLoadError as e:
        logging.error(f"Cannot annotate without an airport catalog: {e}")
        return 1

    annotator = TrackAnnotator(index, config=config, layout=LabelLayout(zoom=config.zoom))
    annotations = annotator.annotate_files(args.logs)

    print("--- Flight Annotations ---")
    for annotation in annotations:
        name = os.path.basename(annotation.source)
        if annotation.error:
            print(f"  > {name}: FAILED ({annotation.error})")
            continue
        stops = ", ".join(stop.airport_code for stop in annotation.intermediate_stops) or "none"
        print(
            f"  > {name}: {annotation.departure_code or '?'} -> {annotation.arrival_code or '?'} | "
            f"Stops: {stops} | Points: {len(annotation.simplified_path)}/{annotation.sample_count}"
        )

    if args.json_out:
        with open(args.json_out, 'w') as f:
            json.dump([a.to_dict() for a in annotations], f, indent=2)
        logging.info(f"Annotations written to {args.json_out}")

    return 0 if any(a.error is None for a in annotations) else 1


if __name__ == "__main__":
    sys.exit(main())
