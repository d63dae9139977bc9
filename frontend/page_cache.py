"""
Page Cache
==========
Page number -> Sheet mapping for pages already fetched from the backend.
Entries are never invalidated or evicted; `clear()` is the only reset.
"""

from typing import Awaitable, Callable, Dict, Optional

from frontend.sheet import Sheet


class PageCache:

    def __init__(self):
        self._pages: Dict[int, Sheet] = {}

    def __contains__(self, page: int) -> bool:
        return page in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def get(self, page: int) -> Optional[Sheet]:
        return self._pages.get(page)

    def put(self, page: int, sheet: Sheet):
        self._pages[page] = sheet

    def clear(self):
        self._pages.clear()

    async def get_or_fetch(self, page: int, fetch: Callable[[int], Awaitable[Sheet]]) -> Sheet:
        """Return the cached sheet, calling `fetch(page)` only on a miss"""
        sheet = self._pages.get(page)
        if sheet is None:
            sheet = await fetch(page)
            self._pages[page] = sheet
        return sheet
