"""
Table Service - Business Logic Layer
====================================
Table listing, paged reads and full-table export
"""

from typing import List, Dict, Any, Optional

from config import settings
from database.table_repository import TableRepository
from models import TablesResponse, TablePageResponse, TableExportResponse
from utils import logger
from utils.pagination import compute_offset, build_pagination, batch_windows

MODULE = "TableService"


def require_table_name(table: Optional[str]) -> str:
    """Reject blank table names; anything else reaches the data layer as-is."""
    if table is None or not table.strip():
        raise ValueError("Table name is required")
    return table


class TableService:
    """
    Service layer for table browsing
    """

    def __init__(self, repository=None, batch_size: Optional[int] = None):
        """Initialize service with repository"""
        self.repository = repository or TableRepository()
        self.batch_size = batch_size or settings.EXPORT_BATCH_SIZE

    async def list_tables(self) -> TablesResponse:
        tables = await self.repository.list_table_names()
        logger.info(f"Found {len(tables)} tables", MODULE)
        return TablesResponse(tables=tables)

    async def get_table_page(
        self,
        table: str,
        page: int = 1,
        limit: Optional[int] = None
    ) -> TablePageResponse:
        """
        Read one page of a table

        Args:
            table: Table name
            page: 1-based page number
            limit: Rows per page (defaults to DEFAULT_PAGE_SIZE)

        Returns:
            TablePageResponse: rows plus {page, limit, total, totalPages}
        """
        table = require_table_name(table)
        limit = limit or settings.DEFAULT_PAGE_SIZE
        offset = compute_offset(page, limit)

        rows, total = await self.repository.fetch_rows(table, offset, limit)
        if total is None:
            # page past the end: the range request carries no count
            total = await self.repository.count_rows(table)

        logger.info(f"'{table}' page {page}: {len(rows)} rows (total {total})", MODULE)
        return TablePageResponse(
            table=table,
            rows=rows,
            pagination=build_pagination(page, limit, total),
        )

    async def export_table(self, table: str) -> TableExportResponse:
        """
        Read a whole table in fixed-size windows

        Windows are fetched one after another until the row count reported
        by the first window is reached. The first failing window aborts the
        export and nothing fetched so far is returned.
        """
        table = require_table_name(table)
        logger.info(f"Exporting '{table}' in batches of {self.batch_size}", MODULE)

        all_rows: List[Dict[str, Any]] = []
        rows, total = await self.repository.fetch_rows(table, 0, self.batch_size)
        all_rows.extend(rows)
        if total is None:
            total = len(rows)

        for start, end in batch_windows(total, self.batch_size)[1:]:
            rows, _ = await self.repository.fetch_rows(table, start, end - start + 1)
            if not rows:
                logger.warn(
                    f"'{table}' returned no rows at offset {start} "
                    f"(expected {total}), stopping export",
                    MODULE
                )
                break
            all_rows.extend(rows)

        logger.info(f"Exported {len(all_rows)} rows from '{table}'", MODULE)
        return TableExportResponse(table=table, rows=all_rows, total=len(all_rows))
