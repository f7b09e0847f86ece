# src/creeper/parser.py
"""Parsing of the raw EXIF strings produced by the metadata reader."""

import re
from datetime import datetime
from typing import Optional

# e.g. 37 deg 48' 52.92" N
GPS_PATTERN = re.compile(r"(\d+(?:\.\d+)?) deg (\d+(?:\.\d+)?)' (\d+(?:\.\d+)?)\" ([NSEW])")

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

LATITUDE_LIMIT = 90.0
LONGITUDE_LIMIT = 180.0

HEMISPHERE_LIMITS = {"N": LATITUDE_LIMIT, "S": LATITUDE_LIMIT, "E": LONGITUDE_LIMIT, "W": LONGITUDE_LIMIT}


def parse_latlong(raw: Optional[str]) -> Optional[float]:
    """
    Converts a degrees/minutes/seconds GPS string into signed decimal degrees.

    South and West are negative. If the text holds more than one coordinate,
    the last one wins. Returns None for absent or unparseable input, and for
    a magnitude beyond 90 (N/S) or 180 (E/W).
    """
    if not raw or not isinstance(raw, str):
        return None

    value = None
    for match in GPS_PATTERN.finditer(raw):
        degrees, minutes, seconds, hemisphere = match.groups()
        value = float(degrees) + (float(minutes) / 60.0) + (float(seconds) / 3600.0)
        if value > HEMISPHERE_LIMITS[hemisphere]:
            value = None
        elif hemisphere in ("S", "W"):
            value = -value
    return value


def in_range(value: Optional[float], limit: float) -> bool:
    # False for NaN too
    return value is not None and -limit <= value <= limit


def parse_exif_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw or not isinstance(raw, str):
        return None
    try:
        return datetime.strptime(raw.strip(), EXIF_DATETIME_FORMAT)
    except ValueError:
        return None
