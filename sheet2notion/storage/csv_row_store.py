"""
CSV file row storage.
"""

import csv
from pathlib import Path
from typing import Any

from sheet2notion.observability.logger import get_logger

logger = get_logger(__name__)


class CsvRowStore:
    """
    RowStore backed by a CSV file with a header line.

    Row ids are 1-based data rows: row 1 is the first line after the
    header. Cells are returned as strings; blank cells are "".
    """

    def __init__(self, file_path: str | Path, delimiter: str = ",", encoding: str = "utf-8"):
        """
        Initialize CSV row store.

        Args:
            file_path: Path to CSV file
            delimiter: Field delimiter
            encoding: File encoding
        """
        self.file_path = Path(file_path)
        self.delimiter = delimiter
        self.encoding = encoding
        if not self.file_path.exists():
            raise FileNotFoundError(f"CSV file not found: {file_path}")

    def _read_all(self) -> list[list[str]]:
        with open(self.file_path, newline="", encoding=self.encoding) as f:
            return list(csv.reader(f, delimiter=self.delimiter))

    def _write_all(self, rows: list[list[str]]) -> None:
        with open(self.file_path, "w", newline="", encoding=self.encoding) as f:
            csv.writer(f, delimiter=self.delimiter).writerows(rows)

    def header(self) -> list[str]:
        rows = self._read_all()
        return rows[0] if rows else []

    def row_count(self) -> int:
        return max(len(self._read_all()) - 1, 0)

    def read_row(self, row_id: int) -> list[str]:
        """
        Read one data row.

        Raises:
            IndexError: If the row does not exist
        """
        rows = self._read_all()
        if row_id < 1 or row_id >= len(rows):
            raise IndexError(f"Row {row_id} not found in {self.file_path.name}")
        return rows[row_id]

    def write_cell(self, row_id: int, slot: int, value: Any) -> None:
        """
        Overwrite one cell, padding the row with blanks if it is short.

        Raises:
            IndexError: If the row does not exist
        """
        rows = self._read_all()
        if row_id < 1 or row_id >= len(rows):
            raise IndexError(f"Row {row_id} not found in {self.file_path.name}")

        row = rows[row_id]
        if len(row) <= slot:
            row.extend([""] * (slot + 1 - len(row)))
        row[slot] = "" if value is None else str(value)
        self._write_all(rows)
        logger.debug("Cell written", extra={"row_id": row_id, "slot": slot})
