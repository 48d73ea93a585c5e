"""Pages and items produced by a paginator."""

from typing import Any

from pydantic import BaseModel, Field


class Item(BaseModel, frozen=True):
    """One result row together with its cursor.

    Resuming from `cursor` yields the rows after this one, not including it.
    """

    data: Any
    """The row as returned by the query."""

    cursor: str
    """Cursor encoding this row's discriminator values."""


class Page(BaseModel, frozen=True):
    """The items returned by one execution of the query. Never empty."""

    items: tuple[Item, ...] = Field(min_length=1)
    """Items in query order."""

    def first_cursor(self) -> str:
        """Cursor of the first item of the page."""
        return self.items[0].cursor

    def last_cursor(self) -> str:
        """Cursor of the last item, the one to persist to resume after this page."""
        return self.items[-1].cursor

    def rows(self) -> list[Any]:
        """The rows of the page, without their cursors."""
        return [item.data for item in self.items]

    def __len__(self) -> int:
        return len(self.items)
