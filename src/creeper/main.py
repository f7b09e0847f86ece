# src/creeper/main.py
"""Main backend module for Creeper image intake."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional
from threading import Event

from .generators import ExcelReportGenerator
from .exceptions import InputFolderMissingError, NoGPSDataError, ProcessCancelledError
from .constants import DEFAULT_PROJECT_NAME

# Configure logger
log_dir = Path.home() / ".creeper_logs"
log_dir.mkdir(exist_ok=True)
log_file = log_dir / "app.log"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8"),
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger(__name__)


def process_images_backend(
    input_path_str: str,
    output_path_str: str,
    project_name_str: str,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    stop_event: Optional[Event] = None,
    include_no_gps: bool = False,
    max_workers: Optional[int] = None,
) -> str:
    """
    Takes in every image of a folder and writes their locations to an Excel report.

    Args:
        input_path_str: Path to directory containing images.
        output_path_str: Path to output directory for the report.
        project_name_str: Base name for the generated report file.
        progress_callback: Optional callback for progress updates.
        stop_event: Optional threading event for cancellation.
        include_no_gps: Keep images without a location (empty coordinates).
        max_workers: Thread pool size for metadata extraction.

    Returns:
        Success message with processing summary.

    Raises:
        InputFolderMissingError: If input folder doesn't exist.
        NoImagesFoundError: If no supported images are found.
        NoGPSDataError: If no image has a location (and include_no_gps=False).
        ProcessCancelledError: If processing is cancelled via stop_event.
    """
    from .intake import ImageIntake

    logger.info("Starting backend process")

    input_dir = Path(input_path_str)
    output_dir = Path(output_path_str)

    if not input_dir.exists():
        raise InputFolderMissingError(input_dir)

    base_name = project_name_str.strip() or DEFAULT_PROJECT_NAME
    base_name = base_name.replace(".xlsx", "")

    intake = ImageIntake(
        input_dir=input_dir,
        include_no_gps=include_no_gps,
        progress_callback=progress_callback,
        stop_event=stop_event,
        max_workers=max_workers,
    )

    records = intake.process()
    total_valid = len(records)

    if total_valid == 0:
        raise NoGPSDataError(intake.get_total_files(), str(input_dir))

    excel_gen = ExcelReportGenerator()
    for i, record in enumerate(records):
        if stop_event and stop_event.is_set():
            raise ProcessCancelledError()

        if progress_callback:
            progress_callback(i, total_valid, f"Generating report: {record.filename}")

        excel_gen.add_row(i + 2, i + 1, record)

    if progress_callback:
        progress_callback(total_valid, total_valid, "Saving files...")

    output_dir.mkdir(parents=True, exist_ok=True)
    xlsx_path = _get_unique_path(output_dir / f"{base_name}.xlsx")
    excel_gen.save(xlsx_path)

    with_location = sum(1 for r in records if r.has_location)
    logger.info(f"Process completed. {total_valid} images processed, {with_location} with location.")
    return (
        f"SUCCESS!\nProcessed: {total_valid} images ({with_location} with location).\n"
        f"Generated:\n- {xlsx_path.name}"
    )


def _get_unique_path(path: Path) -> Path:
    """If path exists, returns path with incremental suffix _1, _2, ..."""
    if not path.exists():
        return path
    base = path.stem
    suffix = path.suffix
    parent = path.parent
    i = 1
    while True:
        candidate = parent / f"{base}_{i}{suffix}"
        if not candidate.exists():
            return candidate
        i += 1
