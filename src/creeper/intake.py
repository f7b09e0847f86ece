"""
Image intake for Creeper.

This module contains the ImageIntake class which handles:
- Scanning a folder for supported image files
- Parallel metadata extraction using ThreadPoolExecutor
- Copying the parsed GPS location onto each ImageRecord
- Filtering out records without a location
"""

import logging
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor, as_completed
from threading import Event
from typing import Callable, List, Optional, Tuple

from .extractor import ExifMetadataReader
from .models import ImageRecord
from .constants import IMAGE_EXTENSIONS
from .exceptions import NoImagesFoundError, ProcessCancelledError

logger = logging.getLogger(__name__)


class ImageIntake:
    """Turns image files into ImageRecords carrying their GPS location.

    Attributes:
        input_dir: Path to the directory containing images.
        include_no_gps: Whether to keep records without a location.
        progress_callback: Optional callback for progress updates.
        stop_event: Optional threading event for cancellation.
        max_workers: Thread pool size, None lets the executor decide.
    """

    def __init__(
        self,
        input_dir: Path,
        include_no_gps: bool = False,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
        stop_event: Optional[Event] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.input_dir = input_dir
        self.include_no_gps = include_no_gps
        self.progress_callback = progress_callback
        self.stop_event = stop_event
        self.max_workers = max_workers
        self._reader = ExifMetadataReader()

    def intake_image(self, img_path: Path) -> ImageRecord:
        """Create a record for one image and fill it from its metadata.

        The record starts empty and is filled exactly once, right after the
        EXIF strings are read.
        """
        record = ImageRecord(filename=img_path.name, filepath=str(img_path))
        exif_data = self._reader.read_metadata(img_path)
        record.copy_exif_data(exif_data)

        if not record.has_location:
            logger.debug(f"No usable location for {img_path.name}")
        return record

    def scan_files(self) -> List[Path]:
        """Scan the input directory (non-recursive) for supported images.

        Returns:
            Sorted list of unique image paths.

        Raises:
            NoImagesFoundError: If no supported image files are found.
        """
        raw_files: List[Path] = []
        for ext in IMAGE_EXTENSIONS:
            raw_files.extend(self.input_dir.glob(ext))

        image_files = sorted(set(raw_files))
        if not image_files:
            raise NoImagesFoundError(self.input_dir)

        logger.info(f"Found {len(image_files)} images to process")
        return image_files

    def process(self) -> List[ImageRecord]:
        """Take in every image of the input directory.

        Returns:
            Records in file order. Records without a location are dropped
            unless include_no_gps is True.

        Raises:
            NoImagesFoundError: If no supported image files are found.
            ProcessCancelledError: If stop_event is set during processing.
        """
        image_files = self.scan_files()
        total_files = len(image_files)
        kept: List[Tuple[int, ImageRecord]] = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.intake_image, img_path): i
                for i, img_path in enumerate(image_files)
            }

            for i, future in enumerate(as_completed(future_to_index)):
                if self.stop_event and self.stop_event.is_set():
                    logger.info("Cancellation detected during intake")
                    for pending in future_to_index:
                        pending.cancel()
                    raise ProcessCancelledError()

                index = future_to_index[future]
                img_path = image_files[index]

                try:
                    record = future.result()
                    if record.has_location or self.include_no_gps:
                        kept.append((index, record))
                except Exception as e:
                    logger.error(f"Error processing {img_path.name}: {e}")

                if self.progress_callback:
                    self.progress_callback(i + 1, total_files, f"Analyzing: {img_path.name}")

        kept.sort(key=lambda item: item[0])
        return [record for _, record in kept]

    def get_total_files(self) -> int:
        """Count the image files without processing them."""
        return len(self.scan_files())
