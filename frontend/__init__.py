"""
DataGrid Sheets spreadsheet client
==================================
Grid state, page cache and backend API client
"""

from .api_client import DataGridClient
from .page_cache import PageCache
from .sheet import Cell, Sheet, create_empty_sheet, get_column_label, sheet_from_rows
from .spreadsheet import Spreadsheet

__all__ = [
    "DataGridClient",
    "PageCache",
    "Cell",
    "Sheet",
    "Spreadsheet",
    "create_empty_sheet",
    "get_column_label",
    "sheet_from_rows",
]
