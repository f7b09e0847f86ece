"""
Tests for main.py backend functions.
"""
import pytest
from unittest.mock import patch
from pathlib import Path
from threading import Event
import sys
import os

import openpyxl
from PIL import Image

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from creeper.main import process_images_backend, _get_unique_path
from creeper.exceptions import (
    InputFolderMissingError,
    NoImagesFoundError,
    NoGPSDataError,
    ProcessCancelledError,
)

SF_EXIF = {
    "gpslatitude": "37 deg 48' 52.92\" N",
    "gpslongitude": "122 deg 25' 9.84\" W",
    "datetimeoriginal": "2023:01:01 12:00:00",
}


def create_plain_jpg(path: Path) -> None:
    """Write a small JPEG with no EXIF block."""
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(path, "JPEG")


class TestProcessImagesBackend:
    """Tests for the main intake backend."""

    def test_input_folder_missing_raises_error(self, tmp_path):
        with pytest.raises(InputFolderMissingError):
            process_images_backend(
                input_path_str=str(tmp_path / "nonexistent"),
                output_path_str=str(tmp_path / "out"),
                project_name_str="test",
            )

    def test_no_images_found_raises_error(self, tmp_path):
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()

        with pytest.raises(NoImagesFoundError):
            process_images_backend(
                input_path_str=str(empty_dir),
                output_path_str=str(tmp_path / "output"),
                project_name_str="test",
            )

    def test_no_gps_raises_error(self, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        create_plain_jpg(input_dir / "plain.jpg")

        with pytest.raises(NoGPSDataError) as exc_info:
            process_images_backend(
                input_path_str=str(input_dir),
                output_path_str=str(tmp_path / "output"),
                project_name_str="test",
            )
        assert exc_info.value.total_scanned == 1

    def test_cancellation_raises_error(self, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        create_plain_jpg(input_dir / "test.jpg")

        stop_event = Event()
        stop_event.set()

        with pytest.raises(ProcessCancelledError):
            process_images_backend(
                input_path_str=str(input_dir),
                output_path_str=str(tmp_path / "output"),
                project_name_str="test",
                stop_event=stop_event,
            )

    @patch("creeper.intake.ExifMetadataReader.read_metadata", return_value=SF_EXIF)
    def test_writes_report(self, mock_read, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        (input_dir / "sf.jpg").touch()
        output_dir = tmp_path / "output"

        message = process_images_backend(
            input_path_str=str(input_dir),
            output_path_str=str(output_dir),
            project_name_str="trip.xlsx",
        )

        report = output_dir / "trip.xlsx"
        assert report.exists()
        assert "SUCCESS" in message
        ws = openpyxl.load_workbook(report).active
        assert ws["C2"].value == "sf.jpg"
        assert ws["F2"].value == pytest.approx(37.8147, abs=1e-4)
        assert ws["G2"].value == pytest.approx(-122.4194, abs=1e-4)

    @patch("creeper.intake.ExifMetadataReader.read_metadata", return_value=SF_EXIF)
    def test_existing_report_is_not_overwritten(self, mock_read, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        (input_dir / "sf.jpg").touch()
        output_dir = tmp_path / "output"
        output_dir.mkdir()
        (output_dir / "trip.xlsx").write_bytes(b"old")

        process_images_backend(str(input_dir), str(output_dir), "trip")

        assert (output_dir / "trip.xlsx").read_bytes() == b"old"
        assert (output_dir / "trip_1.xlsx").exists()

    def test_include_no_gps_writes_empty_coordinates(self, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        create_plain_jpg(input_dir / "plain.jpg")
        output_dir = tmp_path / "output"

        process_images_backend(str(input_dir), str(output_dir), "", include_no_gps=True)

        ws = openpyxl.load_workbook(output_dir / "creeper_report.xlsx").active
        assert ws["C2"].value == "plain.jpg"
        assert ws["F2"].value in ("", None)


class TestGetUniquePath:
    """Tests for the _get_unique_path helper function."""

    def test_returns_original_if_not_exists(self, tmp_path):
        target = tmp_path / "newfile.xlsx"
        assert _get_unique_path(target) == target

    def test_adds_suffix_if_exists(self, tmp_path):
        target = tmp_path / "existing.xlsx"
        target.touch()
        assert _get_unique_path(target) == tmp_path / "existing_1.xlsx"

    def test_increments_suffix_if_multiple_exist(self, tmp_path):
        target = tmp_path / "report.xlsx"
        target.touch()
        (tmp_path / "report_1.xlsx").touch()
        (tmp_path / "report_2.xlsx").touch()
        assert _get_unique_path(target) == tmp_path / "report_3.xlsx"
