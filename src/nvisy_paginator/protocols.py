"""Core protocols for query executors and value serialization."""

from collections.abc import Iterable
from typing import Protocol, TypeVar, runtime_checkable

from nvisy_paginator.serializers import Scalar

Row_co = TypeVar("Row_co", covariant=True)


@runtime_checkable
class Query(Protocol[Row_co]):
    """Protocol for a parameterized, ordered query executed once per page.

    The query must already be ordered by the discriminator columns, bounded
    by a page size and filtered on the discriminator parameters. The
    paginator only binds parameters and executes it.
    """

    def set_parameter(self, name: str, value: Scalar) -> None:
        """Bind one named parameter for the next execution."""
        ...

    def execute(self) -> Iterable[Row_co]:
        """Run the query with the currently bound parameters."""
        ...

    def signature_text(self) -> str:
        """Return the resolved query text, used to checksum cursors."""
        ...

    def get_hint(self, name: str) -> object:
        """Return an opaque hint, or None if it was never set."""
        ...

    def set_hint(self, name: str, value: object) -> None:
        """Store an opaque hint for external validators."""
        ...


@runtime_checkable
class AsyncQuery(Protocol[Row_co]):
    """Protocol for a query whose execution is awaited."""

    def set_parameter(self, name: str, value: Scalar) -> None:
        """Bind one named parameter for the next execution."""
        ...

    async def execute(self) -> Iterable[Row_co]:
        """Run the query with the currently bound parameters."""
        ...

    def signature_text(self) -> str:
        """Return the resolved query text, used to checksum cursors."""
        ...

    def get_hint(self, name: str) -> object:
        """Return an opaque hint, or None if it was never set."""
        ...

    def set_hint(self, name: str, value: object) -> None:
        """Store an opaque hint for external validators."""
        ...


class ValueSerializer(Protocol):
    """Turns a resolved discriminator value into a storable scalar."""

    def __call__(self, value: object) -> Scalar: ...


class SignatureNormalizer(Protocol):
    """Normalizes query text before it is checksummed."""

    def __call__(self, signature: str) -> str: ...
