"""Command line entrypoint for Mapty."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from mapty.core.config import DEFAULT_ZOOM_LEVEL, AppConfig
from mapty.workout.model import compute_derived_metric
from mapty.workout.persistence import FileStorage, PersistenceAdapter, default_data_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout map")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch the web UI (NiceGUI) with the workout map",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print stored workouts and exit",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8088,
        help="Port for --ui-web",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the workout snapshot (default: ~/.mapty)",
    )
    parser.add_argument(
        "--zoom",
        type=int,
        default=DEFAULT_ZOOM_LEVEL,
        help="Map zoom level used when panning to a workout",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        data_dir=args.data_dir or default_data_dir(),
        zoom_level=args.zoom,
        host=args.web_host,
        port=args.web_port,
    )


def run_list(config: AppConfig) -> int:
    persistence = PersistenceAdapter(FileStorage(config.data_dir), key=config.storage_key)
    workouts = persistence.load()
    if not workouts:
        print("No workouts stored")
        return 0

    for workout in workouts:
        value, unit = compute_derived_metric(workout)
        lat, lng = workout.coordinates
        print(
            f"{workout.description:<28} {workout.distance_km:>6.1f} km "
            f"{workout.duration_min:>6.1f} min {value:>6.1f} {unit:<6} "
            f"@ {lat:.4f},{lng:.4f} clicks={workout.interaction_count}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)

    if args.list:
        return run_list(config)
    if args.ui_web:
        from mapty.ui.web_app import run_web_ui

        return run_web_ui(config)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
