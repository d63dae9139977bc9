"""
DataGrid Sheets - Table Repository
==================================
Data access layer for arbitrary tables exposed through Supabase

Usage:
    repo = TableRepository()
    rows, total = await repo.fetch_rows('error_logs', offset=0, limit=50)
"""

from typing import List, Dict, Any, Optional, Tuple

from postgrest.exceptions import APIError

from config import settings
from database.supabase_client import supabase
from utils import logger
from utils.pagination import row_range

MODULE = "TableRepository"

# PostgREST: requested range starts past the last row (HTTP 416)
RANGE_NOT_SATISFIABLE = "PGRST103"


class TableRepository:
    """
    Repository for table browsing operations

    Provides:
    - Table name listing (RPC)
    - Windowed row reads with exact counts
    """

    def __init__(self, client=None):
        """Initialize repository with Supabase client"""
        client = client or supabase
        if not client:
            raise ValueError(
                "Supabase client not initialized. "
                "Please configure SUPABASE_URL and SUPABASE_KEY in .env"
            )
        self.client = client

    async def list_table_names(self) -> List[Any]:
        """
        List table names through the table-listing RPC

        Returns:
            List: RPC payload as-is (strings or {"table_name": ...} objects)

        Raises:
            Exception: If the RPC call fails
        """
        try:
            result = self.client.rpc(settings.TABLE_NAMES_RPC).execute()
            return result.data or []
        except Exception as e:
            logger.error(f"RPC {settings.TABLE_NAMES_RPC} failed: {str(e)}", MODULE)
            raise

    async def fetch_rows(
        self,
        table: str,
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], Optional[int]]:
        """
        Read a window of rows together with the exact table row count

        Args:
            table: Table name, passed to the data layer unmodified
            offset: Zero-based first row
            limit: Maximum number of rows

        Returns:
            (rows, total): total is None if the server did not report a count
            or the window starts past the last row (rows is then empty)

        Raises:
            Exception: If the query fails (e.g. unknown table)
        """
        start, end = row_range(offset, limit)
        try:
            result = self.client.table(table) \
                .select('*', count='exact') \
                .range(start, end) \
                .execute()
            return result.data or [], result.count
        except APIError as e:
            if e.code == RANGE_NOT_SATISFIABLE:
                logger.warn(f"'{table}' has no rows at {start}-{end}", MODULE)
                return [], None
            logger.error(f"Error reading '{table}' rows {start}-{end}: {str(e)}", MODULE)
            raise
        except Exception as e:
            logger.error(f"Error reading '{table}' rows {start}-{end}: {str(e)}", MODULE)
            raise

    async def count_rows(self, table: str) -> int:
        """
        Exact row count of a table (head request, no rows transferred)

        Raises:
            Exception: If the query fails
        """
        try:
            result = self.client.table(table) \
                .select('*', count='exact', head=True) \
                .execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting '{table}': {str(e)}", MODULE)
            raise
