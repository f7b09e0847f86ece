import openpyxl
from openpyxl.styles import Font, Border, Side

from .constants import EXCEL_HEADERS, COLUMN_WIDTHS


class ExcelReportGenerator:
    def __init__(self, title="Image Locations"):
        self.wb = openpyxl.Workbook()
        self.ws = self.wb.active
        self.ws.title = title
        self.thin_border = Border(
            left=Side(style="thin"), right=Side(style="thin"), top=Side(style="thin"), bottom=Side(style="thin")
        )
        self._setup_headers()

    def _setup_headers(self):
        for cell_coord, text in EXCEL_HEADERS.items():
            cell = self.ws[cell_coord]
            cell.value = text
            cell.font = Font(bold=True)
            cell.border = self.thin_border

        for col, width in COLUMN_WIDTHS.items():
            self.ws.column_dimensions[col].width = width

    def add_row(self, row_idx, sequence, record):
        # Records kept without a location get empty coordinate cells
        lat = record.latitude if record.latitude is not None else ""
        lon = record.longitude if record.longitude is not None else ""

        cells = [
            (2, sequence),
            (3, record.filename),
            (4, record.description or ""),
            (5, str(record.taken_at) if record.taken_at else ""),
            (6, lat),
            (7, lon),
        ]
        for col_idx, val in cells:
            c = self.ws.cell(row=row_idx, column=col_idx, value=val)
            c.border = self.thin_border

    def save(self, path):
        self.wb.save(str(path))
