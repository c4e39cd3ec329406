"""Command line entry point.

Usage examples:

    # Analyse an exported workout, automatic pitch orientation
    referee-analytics --export-dir exports --workout-id 8F2C

    # Same workout with three calibration corners (TL, TR, BL)
    referee-analytics --export-dir exports --workout-id 8F2C \
        --corner 40.4168,-3.7038 --corner 40.4168,-3.7030 --corner 40.4159,-3.7038

    # List recent workouts available for linking
    referee-analytics --export-dir exports --list-recent

    # Analyse the newest listed workout when none is linked
    referee-analytics --export-dir exports --pick 0

    # Heat map for a bare GPX trace
    referee-analytics --gpx match.gpx
"""

from __future__ import annotations

import argparse
from datetime import datetime
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import (
    DEFAULT_MAX_HR,
    HEATMAP_OUTPUT_DIR,
    OUTPUT_FILE_TIMESTAMP_ENABLED,
    RECENT_WORKOUTS_LIMIT,
)
from .errors import CalibrationError, PayloadFormatError
from .geometry.models import CalibrationCorners, LatLon
from .heart_rate import default_thresholds
from .models import WorkoutSummary
from .reporting import virtual_bins_frame, zone_durations_frame
from .services.analysis_service import (
    MatchAnalysisConfig,
    MatchAnalysisService,
    resolve_workout_id,
)
from .services.heatmap_service import HeatMapResult, compute_heat_map
from .utils import format_duration, slugify
from .visualization import build_heatmap_map
from .wearable.file_source import JsonExportSource
from .wearable.gpx import load_gpx_segments


def _setup_logging(level: str = "INFO") -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _parse_corner(value: str) -> LatLon:
    try:
        lat_text, lon_text = value.split(",")
        return float(lat_text), float(lon_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected LAT,LON but got {value!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Build a referee's match heat map (geographic and virtual pitch)"
            " and heart-rate zone summary from a recorded workout."
        )
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--export-dir", type=Path, help="Directory of JSON workout exports")
    source.add_argument("--gpx", type=Path, help="Analyse a single GPX trace")
    parser.add_argument("--workout-id", help="Workout to analyse (with --export-dir)")
    parser.add_argument(
        "--list-recent",
        action="store_true",
        help="List recent workouts available for linking and exit",
    )
    parser.add_argument(
        "--pick",
        type=int,
        metavar="N",
        help="Analyse the N-th entry of --list-recent (0 = newest) when no --workout-id is linked",
    )
    parser.add_argument(
        "--corner",
        action="append",
        type=_parse_corner,
        default=[],
        help="Calibration corner LAT,LON; pass up to three (TL, TR, BL)",
    )
    parser.add_argument(
        "--max-hr",
        type=float,
        default=DEFAULT_MAX_HR,
        help=f"Maximum heart rate for zones (default: {DEFAULT_MAX_HR:g})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(HEATMAP_OUTPUT_DIR),
        help="Where HTML maps and CSV tables are written",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level",
    )
    return parser


def _output_stem(name: str) -> str:
    stem = slugify(name)
    if OUTPUT_FILE_TIMESTAMP_ENABLED:
        stem = f"{stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return stem


def _write_outputs(
    result: HeatMapResult,
    corners: CalibrationCorners,
    output_dir: Path,
    stem: str,
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    html_path = output_dir / f"{stem}.html"
    csv_path = output_dir / f"{stem}_virtual.csv"
    build_heatmap_map(result, corners=corners, output_html_path=html_path)
    virtual_bins_frame(result.virtual_bins).to_csv(csv_path, index=False)
    logging.info(
        "Heat map (%s, %d geo bins, %d virtual bins) written to %s and %s",
        result.mode,
        len(result.geographic_bins),
        len(result.virtual_bins),
        html_path,
        csv_path,
    )


def _run_gpx(path: Path, corners: CalibrationCorners, output_dir: Path) -> int:
    try:
        segments = load_gpx_segments(path)
    except (PayloadFormatError, FileNotFoundError) as exc:
        logging.error("Failed to read GPX '%s': %s", path, exc)
        return 1
    trace: List[LatLon] = [point for segment in segments for point in segment]
    result = compute_heat_map(trace, corners)
    _write_outputs(result, corners, output_dir, _output_stem(path.stem))
    return 0


def _run_export(args: argparse.Namespace, corners: CalibrationCorners) -> int:
    source = JsonExportSource(args.export_dir)
    thresholds = default_thresholds()
    service = MatchAnalysisService(
        source, MatchAnalysisConfig(max_hr=args.max_hr, thresholds=thresholds)
    )

    recent: List[WorkoutSummary] = []
    if args.list_recent or (args.pick is not None and not args.workout_id):
        recent = service.recent_workouts(RECENT_WORKOUTS_LIMIT)

    if args.list_recent:
        for index, summary in enumerate(recent):
            print(
                f"{index}\t{summary.workout_id}\t{summary.start.isoformat()}\t"
                f"{format_duration(summary.duration_s)}\t{summary.total_distance_m:.0f} m"
            )
        return 0

    workout_id = resolve_workout_id(args.workout_id, recent, args.pick)
    if workout_id is None and args.pick is not None:
        logging.error("No recent workout at position %d (%d listed)", args.pick, len(recent))
    analysis = service.analyze(workout_id, corners)
    if not analysis.ready or analysis.heat_map is None:
        logging.error("%s", analysis.message)
        return 1

    logging.info("Duration %s", analysis.duration_label)
    if analysis.average_hr is not None:
        logging.info("Average heart rate %.0f bpm", analysis.average_hr)
    if analysis.max_speed_kmh is not None:
        logging.info("Max speed %.1f km/h", analysis.max_speed_kmh)
    if analysis.step_count is not None:
        logging.info("Steps %d", analysis.step_count)

    stem = _output_stem(f"workout-{workout_id}")
    _write_outputs(analysis.heat_map.result, corners, args.output_dir, stem)
    zones_path = args.output_dir / f"{stem}_zones.csv"
    zone_durations_frame(analysis.zone_durations, args.max_hr, thresholds).to_csv(
        zones_path, index=False
    )
    logging.info("Zone summary written to %s", zones_path)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m referee_analytics``."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)

    try:
        corners = CalibrationCorners.from_points(args.corner)
    except CalibrationError as exc:
        logging.error("%s", exc)
        return 1
    if corners.points and not corners.is_complete:
        logging.warning(
            "Only %d calibration corners given; using automatic orientation",
            len(corners.points),
        )

    if args.gpx is not None:
        return _run_gpx(args.gpx, corners, args.output_dir)
    if not args.workout_id and not args.list_recent and args.pick is None:
        parser.error("--workout-id, --pick or --list-recent is required with --export-dir")
    return _run_export(args, corners)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
