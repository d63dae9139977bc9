"""
Spreadsheet Client State
========================
Sheets-per-table grid state driven by the backend API

Process:
1. load_tables(): one sheet per database table
2. load_page(n): page n of the active table, served from the page cache
   when it was fetched before
3. handle_cell_change(): in-place edits of the active grid
4. export_active_table(): whole table to an .xlsx file
"""

import time
from typing import List, Dict, Any, Optional, Tuple

import pandas as pd

from frontend.api_client import DataGridClient
from frontend.page_cache import PageCache
from frontend.settings import client_settings
from frontend.sheet import Sheet, create_empty_sheet, sheet_from_rows


class Spreadsheet:
    """
    Transient UI state: sheets, active sheet, selected cell and one page
    cache per table.

    Fetch failures are logged and leave the current grid untouched.
    Responses are applied in the order they complete.
    """

    def __init__(self, api: DataGridClient, page_size: Optional[int] = None):
        self.api = api
        self.page_size = page_size or client_settings.PAGE_SIZE
        self.sheets: List[Sheet] = [
            create_empty_sheet("sheet-1", "Sheet1"),
            create_empty_sheet("sheet-2", "Sheet2"),
            create_empty_sheet("sheet-3", "Sheet3"),
        ]
        self.active_sheet_id = "sheet-1"
        self.selected_cell: Optional[Tuple[int, int]] = None

        # sheet id -> table name, for sheets backed by a database table
        self.sheet_tables: Dict[str, str] = {}
        self.page_caches: Dict[str, PageCache] = {}
        self.pagination: Dict[str, Dict[str, Any]] = {}
        self.current_page: Dict[str, int] = {}

    # =========================================================================
    # Sheet access
    # =========================================================================

    @property
    def active_sheet(self) -> Sheet:
        return next(s for s in self.sheets if s.id == self.active_sheet_id)

    @property
    def active_table(self) -> Optional[str]:
        return self.sheet_tables.get(self.active_sheet_id)

    def _find_sheet(self, sheet_id: str) -> Sheet:
        for sheet in self.sheets:
            if sheet.id == sheet_id:
                return sheet
        raise KeyError(f"Unknown sheet: {sheet_id}")

    def _replace_sheet(self, sheet: Sheet):
        self.sheets = [sheet if s.id == sheet.id else s for s in self.sheets]

    def page_cache(self, table: str) -> PageCache:
        if table not in self.page_caches:
            self.page_caches[table] = PageCache()
        return self.page_caches[table]

    # =========================================================================
    # Fetching
    # =========================================================================

    async def load_tables(self) -> bool:
        """
        Replace the sheets with one empty sheet per table

        Returns:
            bool: False if the fetch failed or returned no tables
        """
        try:
            tables = await self.api.list_tables()
        except Exception as e:
            print(f"[Spreadsheet] Error fetching tables: {str(e)}")
            return False

        if not isinstance(tables, list) or not tables:
            print("[Spreadsheet] No tables found or invalid data format")
            return False

        sheets = []
        sheet_tables = {}
        for index, table in enumerate(tables):
            table_name = table.get("table_name") if isinstance(table, dict) else table
            sheet = create_empty_sheet(f"sheet-{index}", str(table_name))
            sheets.append(sheet)
            sheet_tables[sheet.id] = str(table_name)

        self.sheets = sheets
        self.sheet_tables = sheet_tables
        self.active_sheet_id = sheets[0].id
        self.selected_cell = None
        print(f"[Spreadsheet] Loaded {len(sheets)} tables")
        return True

    async def _fetch_page(self, table: str, sheet_id: str, page: int) -> Sheet:
        data = await self.api.get_table_page(table, page=page, limit=self.page_size)
        self.pagination[table] = data.get("pagination", {})
        return sheet_from_rows(sheet_id, table, data.get("rows") or [])

    async def load_page(self, page: int = 1) -> bool:
        """
        Show `page` of the active table in the active sheet

        Returns:
            bool: False if there is no backing table or the fetch failed
        """
        table = self.active_table
        if table is None:
            print(f"[Spreadsheet] Sheet '{self.active_sheet.name}' is not backed by a table")
            return False

        sheet_id = self.active_sheet_id
        cache = self.page_cache(table)
        try:
            sheet = await cache.get_or_fetch(
                page, lambda p: self._fetch_page(table, sheet_id, p)
            )
        except Exception as e:
            print(f"[Spreadsheet] Error fetching '{table}' page {page}: {str(e)}")
            return False

        # cached pages outlive table reloads, which renumber the sheets
        sheet.id = sheet_id
        sheet.name = self._find_sheet(sheet_id).name
        self._replace_sheet(sheet)
        self.current_page[table] = page
        return True

    def total_pages(self, table: Optional[str] = None) -> Optional[int]:
        table = table or self.active_table
        return self.pagination.get(table, {}).get("totalPages")

    async def next_page(self) -> bool:
        table = self.active_table
        if table is None:
            return False
        if table not in self.current_page:
            # nothing shown yet, so the page count is unknown
            return await self.load_page(1)
        page = self.current_page[table] + 1
        total_pages = self.total_pages(table)
        if total_pages is not None and page > total_pages:
            return False
        return await self.load_page(page)

    async def previous_page(self) -> bool:
        table = self.active_table
        if table is None:
            return False
        page = self.current_page.get(table, 1) - 1
        if page < 1:
            return False
        return await self.load_page(page)

    # =========================================================================
    # Editing
    # =========================================================================

    def select_cell(self, row: int, col: int):
        self.selected_cell = (row, col)

    def handle_cell_change(self, row: int, col: int, value: str):
        self.active_sheet.set_cell(row, col, value)
        self.selected_cell = (row, col)

    def set_active_sheet(self, sheet_id: str):
        self._find_sheet(sheet_id)
        self.active_sheet_id = sheet_id
        self.selected_cell = None

    def add_sheet(self) -> Sheet:
        sheet = create_empty_sheet(
            f"sheet-{int(time.time() * 1000)}-{len(self.sheets)}",
            f"Sheet{len(self.sheets) + 1}"
        )
        self.sheets.append(sheet)
        self.active_sheet_id = sheet.id
        return sheet

    def delete_sheet(self, sheet_id: str) -> bool:
        """Delete a sheet; the last remaining sheet is never deleted"""
        if len(self.sheets) == 1:
            return False

        self._find_sheet(sheet_id)
        self.sheets = [s for s in self.sheets if s.id != sheet_id]
        self.sheet_tables.pop(sheet_id, None)
        if self.active_sheet_id == sheet_id:
            self.active_sheet_id = self.sheets[0].id
        return True

    def rename_sheet(self, sheet_id: str, new_name: str):
        self._find_sheet(sheet_id).name = new_name

    # =========================================================================
    # Output
    # =========================================================================

    async def export_active_table(self, path: str) -> int:
        """
        Download every row of the active table into an .xlsx workbook

        Returns:
            int: Number of rows written

        Raises:
            ValueError: If the active sheet has no backing table
            httpx.HTTPStatusError: If the export request fails
        """
        table = self.active_table
        if table is None:
            raise ValueError(f"Sheet '{self.active_sheet.name}' is not backed by a table")

        data = await self.api.export_table(table)
        rows = data.get("rows") or []

        df = pd.DataFrame(rows)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            # Excel caps sheet names at 31 characters
            df.to_excel(writer, sheet_name=table[:31], index=False)

        print(f"[Spreadsheet] Exported {len(rows)} rows of '{table}' to {path}")
        return len(rows)

    def render(self, max_rows: Optional[int] = None, max_cols: Optional[int] = None) -> str:
        df = self.active_sheet.to_dataframe()
        if max_rows is not None:
            df = df.iloc[:max_rows]
        if max_cols is not None:
            df = df.iloc[:, :max_cols]
        return df.to_string()
