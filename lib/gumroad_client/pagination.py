from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping

from .errors import PaginationError

PAGE_KEY_PARAM = "page_key"
NEXT_PAGE_KEY_FIELD = "next_page_key"

Operation = Callable[[dict[str, Any]], Awaitable["Page"]]


class Continuation:
    """Deferred fetch of the following page.

    Re-invocable once settled; invoking it again while a previous call is still
    running raises ``PaginationError`` so a cursor is never followed twice in
    parallel.
    """

    def __init__(self, operation: Operation, params: dict[str, Any]):
        self._operation = operation
        self._params = params
        self._running = False

    @property
    def params(self) -> dict[str, Any]:
        return dict(self._params)

    async def __call__(self) -> "Page":
        if self._running:
            raise PaginationError("previous page request is still in flight")
        self._running = True
        try:
            return await self._operation(dict(self._params))
        finally:
            self._running = False


@dataclass
class Page:
    items: list[Any] = field(default_factory=list)
    next_page_key: str | None = None
    fetch_next: Continuation | None = None

    @property
    def has_next(self) -> bool:
        return self.fetch_next is not None


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def paginate(
        operation: Operation,
        params: Mapping[str, Any] | None,
        body: Mapping[str, Any],
        items_field: str,
) -> Page:
    items = body.get(items_field)
    cursor = body.get(NEXT_PAGE_KEY_FIELD)
    if not isinstance(cursor, str) or not cursor:
        return Page(items=_as_list(items))

    next_params = dict(params or {})
    next_params[PAGE_KEY_PARAM] = cursor
    return Page(
        items=_as_list(items),
        next_page_key=cursor,
        fetch_next=Continuation(operation, next_params),
    )


async def iter_pages(first: Page) -> AsyncIterator[Page]:
    page: Page | None = first
    while page is not None:
        yield page
        page = await page.fetch_next() if page.fetch_next else None


async def iter_items(first: Page) -> AsyncIterator[Any]:
    async for page in iter_pages(first):
        for item in page.items:
            yield item
