import logging
from PIL import Image
import pillow_heif
from pathlib import Path
from typing import Optional, Dict, Any, Sequence

# Register HEIF opener
pillow_heif.register_heif_opener()

from .models import EXIF_KEYS
from .constants import (
    EXIF_GPS_INFO_TAG,
    EXIF_DATETIME_ORIGINAL_TAG,
    EXIF_DATETIME_TAG,
    GPS_LATITUDE_REF,
    GPS_LATITUDE,
    GPS_LONGITUDE_REF,
    GPS_LONGITUDE,
)

logger = logging.getLogger(__name__)


def _rational_to_float(value: Any) -> float:
    # Older Pillow releases hand back (num, den) tuples instead of IFDRational
    if isinstance(value, tuple):
        return float(value[0]) / float(value[1])
    return float(value)


def _format_number(value: float) -> str:
    return ("%.6f" % value).rstrip("0").rstrip(".")


def format_dms(dms: Sequence[Any], ref: Any) -> Optional[str]:
    """
    Renders an EXIF (degrees, minutes, seconds) triple and its hemisphere
    reference as text, e.g. 37 deg 48' 52.92" N.
    """
    try:
        if isinstance(ref, bytes):
            ref = ref.decode("ascii")
        ref = str(ref).strip().upper()
        if ref not in ("N", "S", "E", "W"):
            return None

        d = _rational_to_float(dms[0])
        m = _rational_to_float(dms[1])
        s = _rational_to_float(dms[2])
        if min(d, m, s) < 0:
            return None

        return f"{_format_number(d)} deg {_format_number(m)}' {s:.2f}\" {ref}"
    except (TypeError, ValueError, IndexError, ZeroDivisionError, UnicodeDecodeError) as e:
        logger.warning(f"Error formatting DMS value: {dms} {ref} - {e}")
        return None


class ExifMetadataReader:
    def read_metadata(self, file_path: Path) -> Dict[str, Optional[str]]:
        """
        Reads an image and returns its raw EXIF strings keyed by EXIF_KEYS.
        Missing values are None. Never raises for unreadable files.
        """
        exif_data: Dict[str, Optional[str]] = {key: None for key in EXIF_KEYS}
        try:
            image = Image.open(file_path)
            raw_exif = image._getexif()

            if not raw_exif:
                logger.warning(f"No EXIF data found for {file_path.name}")
                return exif_data

            exif_data["datetimeoriginal"] = self._get_date(raw_exif)

            gps_info = raw_exif.get(EXIF_GPS_INFO_TAG)
            if gps_info:
                exif_data.update(self._get_gps_strings(gps_info, file_path.name))
            else:
                logger.debug(f"No GPS info found for {file_path.name}")

            return exif_data

        except Exception as e:
            logger.error(f"Error extracting metadata from {file_path.name}: {e}")
            return exif_data

    def _get_date(self, raw_exif: Dict[int, Any]) -> Optional[str]:
        date_str = raw_exif.get(EXIF_DATETIME_ORIGINAL_TAG) or raw_exif.get(EXIF_DATETIME_TAG)
        if date_str and isinstance(date_str, str):
            return date_str
        return None

    def _get_gps_strings(self, gps_info: Dict[int, Any], filename: str) -> Dict[str, Optional[str]]:
        lat_dms = gps_info.get(GPS_LATITUDE)
        lat_ref = gps_info.get(GPS_LATITUDE_REF)
        lon_dms = gps_info.get(GPS_LONGITUDE)
        lon_ref = gps_info.get(GPS_LONGITUDE_REF)

        latitude = format_dms(lat_dms, lat_ref) if lat_dms and lat_ref else None
        longitude = format_dms(lon_dms, lon_ref) if lon_dms and lon_ref else None

        # (0, 0) is what receivers write when they never got a fix
        if self._is_null_island(lat_dms) and self._is_null_island(lon_dms):
            logger.warning(f"GPS coordinates are (0.0, 0.0) for {filename}. Treating as no GPS.")
            return {"gpslatitude": None, "gpslongitude": None}

        return {"gpslatitude": latitude, "gpslongitude": longitude}

    def _is_null_island(self, dms: Any) -> bool:
        if not dms:
            return False
        try:
            return all(_rational_to_float(part) == 0.0 for part in dms)
        except (TypeError, ValueError, ZeroDivisionError):
            return False
