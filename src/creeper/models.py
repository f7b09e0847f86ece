from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from .parser import parse_latlong, parse_exif_timestamp, in_range, LATITUDE_LIMIT, LONGITUDE_LIMIT

# Keys the metadata reader fills in. Values are raw strings or None.
EXIF_KEYS = ("gpslatitude", "gpslongitude", "datetimeoriginal")

ExifData = Mapping[str, Optional[str]]


@dataclass
class ImageRecord:
    """An uploaded image and the location read from its metadata."""
    filename: str
    filepath: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    taken_at: Optional[datetime] = None
    description: Optional[str] = ""
    sequence_id: Optional[str] = None

    def copy_exif_data(self, exif_data: ExifData) -> None:
        """Fills latitude, longitude and date from the raw EXIF strings.

        A coordinate that does not parse or falls outside its range stays None.
        """
        latitude = parse_latlong(exif_data.get("gpslatitude"))
        longitude = parse_latlong(exif_data.get("gpslongitude"))
        self.latitude = latitude if in_range(latitude, LATITUDE_LIMIT) else None
        self.longitude = longitude if in_range(longitude, LONGITUDE_LIMIT) else None
        self.taken_at = parse_exif_timestamp(exif_data.get("datetimeoriginal"))

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __str__(self):
        return f"{self.filename}: {self.latitude}, {self.longitude}"
