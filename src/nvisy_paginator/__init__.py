"""Discriminator-based keyset pagination."""

from nvisy_paginator.cursor import CursorCodec, keep_signature, strip_trailing_limit
from nvisy_paginator.discriminator import Discriminator, RowShape
from nvisy_paginator.errors import (
    ConfigurationError,
    ErrorKind,
    InvalidCursorError,
    PaginatorError,
    QueryValidationError,
)
from nvisy_paginator.guards import attach_guards, ensure_limit, ensure_order_by, run_guards
from nvisy_paginator.page import Item, Page
from nvisy_paginator.paginator import AsyncPaginator, Paginator, PaginatorState
from nvisy_paginator.params import PaginatorParams
from nvisy_paginator.protocols import AsyncQuery, Query, SignatureNormalizer, ValueSerializer
from nvisy_paginator.serializers import TIMESTAMP_FORMAT, DefaultValueSerializer, Scalar

__all__ = [
    # Engine
    "AsyncPaginator",
    "Paginator",
    "PaginatorParams",
    "PaginatorState",
    # Model
    "Discriminator",
    "Item",
    "Page",
    "RowShape",
    # Cursors and values
    "TIMESTAMP_FORMAT",
    "CursorCodec",
    "DefaultValueSerializer",
    "Scalar",
    "keep_signature",
    "strip_trailing_limit",
    # Protocols
    "AsyncQuery",
    "Query",
    "SignatureNormalizer",
    "ValueSerializer",
    # Guards
    "attach_guards",
    "ensure_limit",
    "ensure_order_by",
    "run_guards",
    # Errors
    "ConfigurationError",
    "ErrorKind",
    "InvalidCursorError",
    "PaginatorError",
    "QueryValidationError",
]
