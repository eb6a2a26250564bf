"""
Row storage implementations.
"""

from .csv_row_store import CsvRowStore

__all__ = ["CsvRowStore"]
