#!/usr/bin/env python3
"""
Command line interface for Creeper.

Usage:
    creeper parse "37 deg 48' 52.92\\" N"
    creeper inspect --file "photo.jpg" --dir "./photos"
    creeper scan --input "./photos" --output "./out" --name "trip"
    creeper batch --input "./day1" --input "./day2" --output "./out" --name "trip"
    creeper config --include-no-gps --max-workers 4
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .exceptions import CreeperError
from .extractor import ExifMetadataReader
from .parser import parse_latlong


def cmd_parse(args: argparse.Namespace) -> int:
    value = parse_latlong(args.coordinate)
    if value is None:
        print("No value: text does not match <D> deg <M>' <S>\" <H>")
        return 1
    print(f"{value:.6f}")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    input_dir = Path(args.dir)
    file_path = input_dir / args.file

    if not file_path.exists():
        print(f"ERROR: File not found: {file_path}")
        return 1

    print(f"--- Processing file: {file_path} ---")
    exif_data = ExifMetadataReader().read_metadata(file_path)

    print(f"Date taken: {exif_data.get('datetimeoriginal') or '-'}")
    raw_lat = exif_data.get("gpslatitude")
    raw_lon = exif_data.get("gpslongitude")
    if not raw_lat and not raw_lon:
        print("No GPS data found in this image.")
        return 1

    print(f"Latitude (raw): {raw_lat}  ->  {parse_latlong(raw_lat)}")
    print(f"Longitude (raw): {raw_lon}  ->  {parse_latlong(raw_lon)}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    # Imported here so parse/inspect don't set up the log file
    from .main import process_images_backend

    config = ConfigManager.load_config()
    input_dir = args.input or config["input_dir"]
    output_dir = args.output or config["output_dir"] or input_dir
    project_name = args.name or config["project_name"]
    include_no_gps = args.include_no_gps or bool(config["include_no_gps"])

    if not input_dir:
        print("ERROR: No input folder given and none saved in settings.")
        return 1

    def _progress(current: int, total: int, message: str) -> None:
        print(f"[{current}/{total}] {message}")

    try:
        message = process_images_backend(
            input_path_str=input_dir,
            output_path_str=output_dir,
            project_name_str=project_name,
            progress_callback=_progress if args.verbose else None,
            include_no_gps=include_no_gps,
            max_workers=config["max_workers"],
        )
    except CreeperError as e:
        print(f"ERROR: {e}")
        return 1

    ConfigManager.save_config(input_dir=input_dir, output_dir=output_dir, project_name=project_name)
    print(message)
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    from .batch_processor import BatchProcessor

    config = ConfigManager.load_config()
    include_no_gps = args.include_no_gps or bool(config["include_no_gps"])
    output_dir = args.output or config["output_dir"] or args.input[0]
    project_name = args.name or config["project_name"]

    processor = BatchProcessor(max_workers=config["max_workers"])
    for input_dir in args.input:
        processor.add_job(input_dir, include_no_gps=include_no_gps)

    def _progress(current: int, total: int, message: str) -> None:
        print(f"[{current}/{total}] {message}")

    result = processor.process_all(progress_callback=_progress if args.verbose else None)
    for line in result.details:
        print(line)
    print(processor.get_summary())

    try:
        report = processor.write_report(output_dir, project_name)
    except CreeperError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Generated: {report}")
    return 0 if result.failed == 0 else 1


def cmd_config(args: argparse.Namespace) -> int:
    if args.max_workers is not None and args.max_workers < 0:
        print("ERROR: --max-workers cannot be negative.")
        return 1

    settings = {}
    if args.include_no_gps is not None:
        settings["include_no_gps"] = args.include_no_gps
    if args.max_workers is not None:
        # 0 lets the thread pool pick its own size
        settings["max_workers"] = args.max_workers or None

    if settings:
        ConfigManager.update_settings(settings)

    for key, value in ConfigManager.load_config().items():
        print(f"{key}: {value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="creeper",
        description="Read GPS locations out of image metadata.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_parse = subparsers.add_parser("parse", help="Convert a DMS coordinate to decimal degrees")
    p_parse.add_argument("coordinate", help="Coordinate text, e.g. 37 deg 48' 52.92\" N")
    p_parse.set_defaults(func=cmd_parse)

    p_inspect = subparsers.add_parser("inspect", help="Show the GPS metadata of one image")
    p_inspect.add_argument("--dir", type=str, default=".", help="Directory containing the image (default: .)")
    p_inspect.add_argument("--file", type=str, required=True, help="Filename of the image to analyze")
    p_inspect.set_defaults(func=cmd_inspect)

    p_scan = subparsers.add_parser("scan", help="Take in a folder of images and write an Excel report")
    p_scan.add_argument("--input", type=str, default="", help="Folder with images (default: saved setting)")
    p_scan.add_argument("--output", type=str, default="", help="Report folder (default: saved setting)")
    p_scan.add_argument("--name", type=str, default="", help="Report base name (default: saved setting)")
    p_scan.add_argument("--include-no-gps", action="store_true", help="Keep images without a location")
    p_scan.add_argument("-v", "--verbose", action="store_true", help="Print progress")
    p_scan.set_defaults(func=cmd_scan)

    p_batch = subparsers.add_parser("batch", help="Take in several folders and write one combined report")
    p_batch.add_argument("--input", type=str, action="append", required=True, help="Folder with images (repeatable)")
    p_batch.add_argument("--output", type=str, default="", help="Report folder (default: saved setting)")
    p_batch.add_argument("--name", type=str, default="", help="Report base name (default: saved setting)")
    p_batch.add_argument("--include-no-gps", action="store_true", help="Keep images without a location")
    p_batch.add_argument("-v", "--verbose", action="store_true", help="Print progress")
    p_batch.set_defaults(func=cmd_batch)

    p_config = subparsers.add_parser("config", help="Show or change the saved processing settings")
    p_config.add_argument(
        "--include-no-gps",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep images without a location by default",
    )
    p_config.add_argument("--max-workers", type=int, default=None, help="Thread pool size, 0 for automatic")
    p_config.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
