"""
DataGrid Sheets - FastAPI Backend
=================================
Table browsing API over a Supabase-hosted Postgres database

Endpoints:
- GET /api/health: health check
- GET /api/tables: table names
- GET /api/tables/{name}?page&limit: one page of rows
- GET /api/tables/{name}/export: every row, fetched in batches
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database.supabase_client import SupabaseClient, supabase
from models import (
    HealthResponse,
    ErrorResponse,
    TablesResponse,
    TablePageResponse,
    TableExportResponse
)
from services.table_service import TableService
from utils import logger

MODULE = "API"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Server running on http://localhost:{settings.PORT}", MODULE)
    if supabase is not None:
        SupabaseClient.test_connection(supabase)
    yield


# =============================================================================
# FastAPI app
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="Paged table browsing and export over Supabase",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_table_service() -> TableService:
    return TableService()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """
    Service information
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
        "endpoints": {
            "health": "/api/health",
            "tables": "/api/tables",
            "table_page": "/api/tables/{name}?page=1&limit=50",
            "table_export": "/api/tables/{name}/export"
        }
    }


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="OK")


@app.get("/api/tables", response_model=TablesResponse, responses=ERROR_RESPONSES)
async def list_tables(service: TableService = Depends(get_table_service)):
    """
    All table names, as reported by the table-listing RPC
    """
    try:
        return await service.list_tables()
    except Exception as e:
        logger.error(f"Failed to fetch table names: {str(e)}", MODULE)
        return error_response(500, str(e))


@app.get("/api/tables/{name}", response_model=TablePageResponse, responses=ERROR_RESPONSES)
async def get_table_page(
    name: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: TableService = Depends(get_table_service)
):
    """
    One page of rows plus pagination info

    NOTE: `name` is forwarded to the data layer without validation beyond
    the blank check. Any caller can read any table the key can see.
    """
    if not name.strip():
        return error_response(400, "Table name is required")

    try:
        return await service.get_table_page(name, page, limit)
    except Exception as e:
        logger.error(f"Failed to fetch '{name}' page {page}: {str(e)}", MODULE)
        return error_response(500, str(e))


@app.get("/api/tables/{name}/export", response_model=TableExportResponse, responses=ERROR_RESPONSES)
async def export_table(
    name: str,
    service: TableService = Depends(get_table_service)
):
    """
    Every row of a table, fetched sequentially in fixed-size batches
    """
    if not name.strip():
        return error_response(400, "Table name is required")

    try:
        return await service.export_table(name)
    except Exception as e:
        logger.error(f"Export of '{name}' failed: {str(e)}", MODULE)
        return error_response(500, str(e))


# =============================================================================
# Exception handlers
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", MODULE)
    return error_response(500, str(exc))


if __name__ == "__main__":
    import uvicorn

    print(f"""
    =================================================================
      {settings.APP_NAME} v{settings.APP_VERSION}
    =================================================================

    API Documentation: http://localhost:{settings.PORT}/docs
    """)

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info"
    )
