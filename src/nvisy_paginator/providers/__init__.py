"""Query implementations for concrete data sources.

Each provider module exports a query class usable with `Paginator` or
`AsyncPaginator`:

- memory: rows held in a Python sequence
- sqlite: SQLite via the standard library `sqlite3`
- postgres: PostgreSQL via asyncpg (requires the `postgres` extra, import
  `nvisy_paginator.providers.postgres` explicitly)
"""

from nvisy_paginator.providers import memory, sqlite

__all__ = [
    "memory",
    "sqlite",
]
