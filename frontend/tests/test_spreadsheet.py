import asyncio
import math

import httpx
import pandas as pd
import pytest

from frontend.api_client import DataGridClient
from frontend.settings import get_base_url, LOCAL_API_URL
from frontend.spreadsheet import Spreadsheet

TABLES = {
    "error_logs": [{"id": i, "message": f"error {i}"} for i in range(120)],
    "users": [{"id": 1, "name": "Kim"}],
}


class FakeBackend:
    """Serves the backend's JSON contract and records every request path."""

    def __init__(self, tables=TABLES, fail_tables=False):
        self.tables = tables
        self.table_list = [{"table_name": "error_logs"}, "users"]
        self.fail_tables = fail_tables
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.url.path, dict(request.url.params)))
        parts = request.url.path.strip("/").split("/")

        if parts == ["api", "tables"]:
            if self.fail_tables:
                return httpx.Response(500, json={"error": "rpc failed"})
            return httpx.Response(200, json={"tables": self.table_list})

        name = parts[2]
        if name not in self.tables:
            return httpx.Response(500, json={"error": f'relation "public.{name}" does not exist'})
        rows = self.tables[name]

        if parts[-1] == "export":
            return httpx.Response(200, json={"table": name, "rows": rows, "total": len(rows)})

        page = int(request.url.params.get("page", 1))
        limit = int(request.url.params.get("limit", 50))
        offset = (page - 1) * limit
        return httpx.Response(200, json={
            "table": name,
            "rows": rows[offset:offset + limit],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": len(rows),
                "totalPages": math.ceil(len(rows) / limit),
            },
        })

    def page_requests(self):
        return [params.get("page") for path, params in self.requests if params]


def run(backend, scenario):
    async def main():
        async with DataGridClient("http://testserver", transport=httpx.MockTransport(backend)) as api:
            return await scenario(Spreadsheet(api, page_size=50))
    return asyncio.run(main())


def test_initial_state_has_three_blank_sheets():
    async def scenario(sheet):
        return sheet

    sheet = run(FakeBackend(), scenario)

    assert [s.name for s in sheet.sheets] == ["Sheet1", "Sheet2", "Sheet3"]
    assert sheet.active_sheet_id == "sheet-1"


def test_load_tables_creates_one_sheet_per_table():
    async def scenario(sheet):
        assert await sheet.load_tables()
        return sheet

    sheet = run(FakeBackend(), scenario)

    assert [s.name for s in sheet.sheets] == ["error_logs", "users"]
    assert sheet.active_sheet_id == "sheet-0"
    assert sheet.active_table == "error_logs"


def test_load_tables_failure_keeps_existing_sheets(capsys):
    async def scenario(sheet):
        return await sheet.load_tables(), sheet

    ok, sheet = run(FakeBackend(fail_tables=True), scenario)

    assert ok is False
    assert [s.name for s in sheet.sheets] == ["Sheet1", "Sheet2", "Sheet3"]
    assert "Error fetching tables" in capsys.readouterr().out


def test_same_page_twice_issues_one_request():
    backend = FakeBackend()

    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(1)
        await sheet.load_page(1)
        return sheet

    sheet = run(backend, scenario)

    assert backend.page_requests() == ["1"]
    assert len(sheet.page_cache("error_logs")) == 1


def test_new_page_issues_request_and_adds_cache_entry():
    backend = FakeBackend()

    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(1)
        await sheet.load_page(2)
        await sheet.load_page(1)
        return sheet

    sheet = run(backend, scenario)

    assert backend.page_requests() == ["1", "2"]
    assert len(sheet.page_cache("error_logs")) == 2
    assert sheet.active_sheet.get_cell(1, 0) == "0"


def test_page_rows_fill_the_grid():
    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(3)
        return sheet

    sheet = run(FakeBackend(), scenario)

    active = sheet.active_sheet
    assert active.get_cell(0, 0) == "id"
    assert active.get_cell(0, 1) == "message"
    assert active.get_cell(1, 0) == "100"
    assert active.get_cell(20, 1) == "error 119"
    assert active.dimensions == (50, 80)
    assert sheet.total_pages() == 3


def test_page_navigation_is_bounded():
    backend = FakeBackend()

    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(1)
        assert not await sheet.previous_page()
        assert await sheet.next_page()
        assert await sheet.next_page()
        assert not await sheet.next_page()
        return sheet

    sheet = run(backend, scenario)

    assert sheet.current_page["error_logs"] == 3
    assert backend.page_requests() == ["1", "2", "3"]


def test_failed_page_keeps_stale_grid(capsys):
    async def scenario(sheet):
        await sheet.load_tables()
        sheet.sheet_tables["sheet-0"] = "missing"
        before = sheet.active_sheet
        ok = await sheet.load_page(1)
        return ok, before, sheet

    ok, before, sheet = run(FakeBackend(), scenario)

    assert ok is False
    assert sheet.active_sheet is before
    assert len(sheet.page_cache("missing")) == 0
    assert "Error fetching 'missing' page 1" in capsys.readouterr().out


def test_edits_survive_cache_hits():
    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(1)
        sheet.handle_cell_change(1, 1, "edited")
        await sheet.load_page(2)
        await sheet.load_page(1)
        return sheet

    sheet = run(FakeBackend(), scenario)

    assert sheet.active_sheet.get_cell(1, 1) == "edited"
    assert sheet.selected_cell == (1, 1)


def test_sheet_management():
    async def scenario(sheet):
        return sheet

    sheet = run(FakeBackend(), scenario)

    added = sheet.add_sheet()
    assert sheet.active_sheet_id == added.id
    assert added.name == "Sheet4"

    sheet.rename_sheet(added.id, "Notes")
    assert sheet.active_sheet.name == "Notes"

    assert sheet.delete_sheet(added.id)
    assert sheet.active_sheet_id == "sheet-1"

    for s in list(sheet.sheets)[1:]:
        sheet.delete_sheet(s.id)
    assert not sheet.delete_sheet("sheet-1")
    assert len(sheet.sheets) == 1


def test_export_active_table_writes_workbook(tmp_path):
    path = tmp_path / "error_logs.xlsx"

    async def scenario(sheet):
        await sheet.load_tables()
        return await sheet.export_active_table(str(path))

    count = run(FakeBackend(), scenario)

    assert count == 120
    df = pd.read_excel(path, sheet_name="error_logs")
    assert list(df.columns) == ["id", "message"]
    assert len(df) == 120


def test_export_failure_raises(tmp_path):
    async def scenario(sheet):
        await sheet.load_tables()
        sheet.sheet_tables["sheet-0"] = "missing"
        await sheet.export_active_table(str(tmp_path / "missing.xlsx"))

    with pytest.raises(httpx.HTTPStatusError):
        run(FakeBackend(), scenario)


def test_render_shows_labels_and_row_numbers():
    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(1)
        return sheet.render(max_rows=2, max_cols=2)

    text = run(FakeBackend(), scenario)

    lines = text.splitlines()
    assert lines[0].split() == ["A", "B"]
    assert lines[1].split() == ["1", "id", "message"]


def test_base_url_for_localhost():
    assert get_base_url("localhost") == LOCAL_API_URL


def test_cached_page_lands_on_its_table_after_reload_in_new_order():
    backend = FakeBackend()

    async def scenario(sheet):
        await sheet.load_tables()
        await sheet.load_page(1)

        backend.table_list = ["users", "error_logs"]
        await sheet.load_tables()
        sheet.set_active_sheet("sheet-1")
        await sheet.load_page(1)
        return sheet

    sheet = run(backend, scenario)

    users, error_logs = sheet.sheets
    assert (users.id, users.name) == ("sheet-0", "users")
    assert users.get_cell(0, 0) == ""
    assert (error_logs.id, error_logs.name) == ("sheet-1", "error_logs")
    assert error_logs.get_cell(1, 1) == "error 0"
    assert backend.page_requests() == ["1"]


def test_next_page_before_any_page_loads_first_page():
    backend = FakeBackend()

    async def scenario(sheet):
        await sheet.load_tables()
        sheet.set_active_sheet("sheet-1")
        assert await sheet.next_page()
        assert not await sheet.next_page()
        return sheet

    sheet = run(backend, scenario)

    assert sheet.current_page["users"] == 1
    assert backend.page_requests() == ["1"]
    assert sheet.active_sheet.get_cell(1, 1) == "Kim"
