import pytest
import sys
import os
from datetime import datetime

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from creeper.parser import parse_latlong, parse_exif_timestamp


class TestParseLatLong:
    """Tests for parse_latlong()"""

    def test_north_latitude(self):
        assert parse_latlong("37 deg 48' 52.92\" N") == pytest.approx(37 + 48 / 60 + 52.92 / 3600)
        assert parse_latlong("37 deg 48' 52.92\" N") == pytest.approx(37.8147, abs=1e-4)

    def test_west_longitude_is_negative(self):
        assert parse_latlong("122 deg 25' 9.84\" W") == pytest.approx(-122.4194, abs=1e-4)

    def test_south_latitude_is_negative(self):
        assert parse_latlong("33 deg 52' 4.32\" S") == pytest.approx(-(33 + 52 / 60 + 4.32 / 3600))

    def test_east_longitude_is_positive(self):
        assert parse_latlong("151 deg 12' 36.00\" E") == pytest.approx(151.21)

    def test_integer_and_decimal_fields(self):
        assert parse_latlong("10 deg 30' 0\" N") == pytest.approx(10.5)
        assert parse_latlong("10.5 deg 0.5' 0.0\" E") == pytest.approx(10.5 + 0.5 / 60)

    def test_zero_magnitude_south_is_not_positive(self):
        value = parse_latlong("0 deg 0' 0.00\" S")
        assert value is not None
        assert value <= 0.0

    @pytest.mark.parametrize("hemisphere", ["N", "E"])
    def test_north_and_east_are_non_negative(self, hemisphere):
        assert parse_latlong(f"45 deg 10' 5.5\" {hemisphere}") >= 0.0

    @pytest.mark.parametrize("hemisphere", ["S", "W"])
    def test_south_and_west_are_non_positive(self, hemisphere):
        assert parse_latlong(f"45 deg 10' 5.5\" {hemisphere}") <= 0.0

    @pytest.mark.parametrize("raw", [None, "", "garbage text", "37.8147", "37 deg 48' 52.92\" X", 37.8])
    def test_unparseable_input_gives_no_value(self, raw):
        assert parse_latlong(raw) is None

    @pytest.mark.parametrize("raw", ["91 deg 0' 0\" N", "90 deg 0' 1\" S", "180 deg 0' 0.01\" W", "500 deg 99' 0\" E"])
    def test_beyond_hemisphere_limit_gives_no_value(self, raw):
        assert parse_latlong(raw) is None

    def test_last_match_wins(self):
        raw = "37 deg 48' 52.92\" N122 deg 25' 9.84\" W"
        assert parse_latlong(raw) == pytest.approx(parse_latlong("122 deg 25' 9.84\" W"))

    def test_surrounding_text_is_ignored(self):
        raw = "GPS Latitude : 37 deg 48' 52.92\" N"
        assert parse_latlong(raw) == pytest.approx(37.8147, abs=1e-4)

    def test_same_input_same_output(self):
        raw = "122 deg 25' 9.84\" W"
        assert parse_latlong(raw) == parse_latlong(raw)


class TestParseExifTimestamp:
    """Tests for parse_exif_timestamp()"""

    def test_valid_timestamp(self):
        assert parse_exif_timestamp("2023:01:01 12:00:00") == datetime(2023, 1, 1, 12, 0, 0)

    @pytest.mark.parametrize("raw", [None, "", "2023-01-01", "not a date"])
    def test_invalid_timestamp(self, raw):
        assert parse_exif_timestamp(raw) is None
