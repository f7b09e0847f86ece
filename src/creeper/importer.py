import logging
from datetime import datetime, date
from pathlib import Path
from typing import List, Dict, Optional

import openpyxl

from .models import ImageRecord
from .parser import parse_latlong, in_range, LATITUDE_LIMIT, LONGITUDE_LIMIT

logger = logging.getLogger(__name__)

# Text cells starting with these are evaluated as formulas by spreadsheet apps.
# + and - are left alone so negative numbers stored as text survive.
DANGEROUS_PREFIXES = ("=", "@", "\t", "\r")


class ExcelImporter:
    """Loads ImageRecords back from an Excel sheet.

    Headers are matched case-insensitively against HEADER_KEYS. Coordinate
    cells may hold numbers, decimal text (comma or dot) or GPS strings such
    as 37 deg 48' 52.92" N.
    """

    HEADER_KEYS = {
        "num": ["nº", "numero", "n°", "id"],
        "file": ["file", "filename", "archivo", "image"],
        "description": ["description", "descripcion", "notes"],
        "date": ["date", "datetime", "timestamp", "taken"],
        "latitude": ["latitude", "lat"],
        "longitude": ["longitude", "lon", "lng"],
    }

    def parse_excel(self, excel_path: Path | str) -> List[ImageRecord]:
        excel_path = Path(excel_path)
        wb = openpyxl.load_workbook(excel_path, data_only=True)
        ws = wb.active

        header_map: Dict[str, int] = {}
        for cell in ws[1]:
            if cell.value is None:
                continue
            text = str(cell.value).strip().lower()
            if not text:
                continue
            for key, variants in self.HEADER_KEYS.items():
                if key not in header_map and any(v in text for v in variants):
                    header_map[key] = cell.column  # 1-based index
                    break

        logger.info(f"Detected header map: {header_map}")

        missing = [k for k in ("file", "latitude", "longitude") if k not in header_map]
        if missing:
            raise ValueError(
                f"Missing critical columns in Excel: {', '.join(missing)}. "
                "Make sure to include columns for 'File', 'Latitude', and 'Longitude'."
            )

        results: List[ImageRecord] = []

        for row_idx in range(2, ws.max_row + 1):

            def _val(col_key: str):
                col = header_map.get(col_key)
                return ws.cell(row=row_idx, column=col).value if col else None

            raw_file = self._sanitize_cell_value(_val("file"))
            if raw_file is None or not str(raw_file).strip():
                continue
            filename = str(raw_file).strip()

            lat = self._to_coordinate(_val("latitude"))
            lon = self._to_coordinate(_val("longitude"))
            if lat is None or lon is None:
                logger.warning(f"Row {row_idx}: Missing or invalid coordinates. Skipping.")
                continue
            if not in_range(lat, LATITUDE_LIMIT) or not in_range(lon, LONGITUDE_LIMIT):
                logger.warning(f"Row {row_idx}: Coordinates out of range ({lat}, {lon}). Skipping.")
                continue

            desc_cell = self._sanitize_cell_value(_val("description"))
            raw_num = _val("num")

            results.append(
                ImageRecord(
                    filename=filename,
                    filepath="",
                    latitude=lat,
                    longitude=lon,
                    taken_at=self._parse_datetime(_val("date")),
                    description=str(desc_cell).strip() if desc_cell not in (None, "") else "",
                    sequence_id=str(raw_num).strip() if raw_num is not None else None,
                )
            )

        return results

    def _sanitize_cell_value(self, value):
        if isinstance(value, str) and value.strip().startswith(DANGEROUS_PREFIXES):
            logger.warning(f"Sanitized potentially dangerous cell value: {value[:20]}...")
            return "'" + value
        return value

    def _to_coordinate(self, value) -> Optional[float]:
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        text = str(value).strip()
        if " deg " in text:
            return parse_latlong(text)
        try:
            return float(text.replace(",", "."))
        except ValueError:
            return None

    def _parse_datetime(self, value) -> Optional[datetime]:
        # openpyxl returns datetime for real date cells
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, datetime.min.time())
        txt = str(value).strip()
        for fmt in ("%Y-%m-%d %H:%M:%S", "%Y:%m:%d %H:%M:%S", "%d/%m/%Y %H:%M:%S", "%Y-%m-%d", "%d/%m/%Y"):
            try:
                return datetime.strptime(txt, fmt)
            except ValueError:
                pass
        return None
