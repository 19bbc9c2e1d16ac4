"""Spreadsheet rendering for retained sensor readings."""

from __future__ import annotations

import io
from typing import Iterable, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from models.records import SensorReading

SHEET_TITLE = "Sensor Data"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, attribute, width)
COLUMNS: Sequence[Tuple[str, str, int]] = (
    ("Timestamp", "timestamp", 25),
    ("Strain", "strain", 15),
    ("Vibration", "vibration", 15),
    ("Displacement", "displacement", 15),
    ("Acceleration", "acceleration", 15),
    ("ID", "id", 25),
)


class SpreadsheetExporter:
    """Render readings into an in-memory ``.xlsx`` document."""

    def __init__(self, sheet_title: str = SHEET_TITLE) -> None:
        self.sheet_title = sheet_title

    def render(self, readings: Iterable[SensorReading]) -> bytes:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.sheet_title

        worksheet.append([header for header, _, _ in COLUMNS])
        for index, (_, _, width) in enumerate(COLUMNS, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width
        bold = Font(bold=True)
        for cell in worksheet[1]:
            cell.font = bold

        for reading in readings:
            worksheet.append([getattr(reading, attribute) for _, attribute, _ in COLUMNS])

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
