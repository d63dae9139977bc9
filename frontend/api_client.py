"""
Backend API Client
==================
Async httpx client for the DataGrid Sheets endpoints

Usage:
    async with DataGridClient() as api:
        tables = await api.list_tables()
"""

from typing import List, Dict, Any, Optional

import httpx

from frontend.settings import get_base_url


class DataGridClient:
    """
    Thin wrapper over the backend's JSON endpoints.

    Non-2xx responses raise httpx.HTTPStatusError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url or get_base_url()
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def health(self) -> Dict[str, Any]:
        return await self._get("/api/health")

    async def list_tables(self) -> List[Any]:
        data = await self._get("/api/tables")
        return data.get("tables") or []

    async def get_table_page(self, table: str, page: int = 1, limit: int = 50) -> Dict[str, Any]:
        """{table, rows, pagination: {page, limit, total, totalPages}}"""
        return await self._get(f"/api/tables/{table}", params={"page": page, "limit": limit})

    async def export_table(self, table: str) -> Dict[str, Any]:
        """{table, rows, total}"""
        return await self._get(f"/api/tables/{table}/export")
