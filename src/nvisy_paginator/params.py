"""Paginator configuration.

`PaginatorParams` holds everything about a pagination run except the query
itself, so the same params can paginate a fresh query on every request:

    params = PaginatorParams(discriminators=(Discriminator(param_name="id", attribute="id"),))
    for page in params.with_cursor(request.cursor).paginate(query):
        ...
"""

from collections.abc import Callable
from typing import Any, Self

from pydantic import BaseModel

from nvisy_paginator.cursor import strip_trailing_limit
from nvisy_paginator.discriminator import Discriminator, RowShape
from nvisy_paginator.guards import attach_guards
from nvisy_paginator.paginator import AsyncPaginator, Paginator
from nvisy_paginator.protocols import AsyncQuery, Query
from nvisy_paginator.serializers import Scalar


class PaginatorParams(BaseModel, frozen=True):
    """Parameters of a pagination run."""

    discriminators: tuple[Discriminator, ...]
    """Discriminators in ORDER BY order, most significant first."""

    row_shape: RowShape = RowShape.OBJECT
    """How string attributes are looked up on result rows."""

    cursor: str | None = None
    """Cursor to resume after. None starts from the discriminator defaults."""

    serializer: Callable[[object], Scalar] | None = None
    """Value serializer. None uses `DefaultValueSerializer`."""

    normalizer: Callable[[str], str] = strip_trailing_limit
    """Normalization applied to the query text before checksumming."""

    guarded: bool = True
    """Attach the default ORDER BY and LIMIT guards to the query."""

    def with_cursor(self, cursor: str | None) -> Self:
        """Return a copy resuming after `cursor`."""
        return self.model_copy(update={"cursor": cursor})

    def paginate(self, query: Query[Any]) -> Paginator:
        """Create a paginator over `query`."""
        if self.guarded:
            attach_guards(query)
        return Paginator(
            query,
            self.discriminators,
            row_shape=self.row_shape,
            cursor=self.cursor,
            serializer=self.serializer,
            normalizer=self.normalizer,
        )

    def paginate_async(self, query: AsyncQuery[Any]) -> AsyncPaginator:
        """Create an asynchronous paginator over `query`."""
        if self.guarded:
            attach_guards(query)
        return AsyncPaginator(
            query,
            self.discriminators,
            row_shape=self.row_shape,
            cursor=self.cursor,
            serializer=self.serializer,
            normalizer=self.normalizer,
        )
