"""
DataGrid Sheets - API Models
============================
Pydantic response models for the table endpoints
"""

from typing import List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str = "OK"


class ErrorResponse(BaseModel):
    """Error payload returned with every non-2xx response"""
    error: str


class TablesResponse(BaseModel):
    """
    Table names as returned by the table-listing RPC.

    Items are passed through untouched; depending on the RPC definition they
    are either bare strings or objects with a `table_name` key.
    """
    tables: List[Any] = Field(default_factory=list)


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0, alias="totalPages")


class TablePageResponse(BaseModel):
    table: str
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination


class TableExportResponse(BaseModel):
    table: str
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = Field(..., ge=0)
