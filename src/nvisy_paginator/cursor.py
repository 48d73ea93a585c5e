"""Cursor encoding and decoding.

A cursor is an opaque token carrying a keyset plus two checksums that tie it
to the query and to the set of discriminators that produced it:

    base64(sha256(signature) ++ sha256("/".join(param_names)) ++ json(values))

The signature is normalized before hashing (by default a trailing LIMIT
clause is removed), so changing the page size does not invalidate cursors.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import re
from collections.abc import Sequence
from typing import ClassVar

from nvisy_paginator.errors import ConfigurationError, InvalidCursorError
from nvisy_paginator.protocols import SignatureNormalizer
from nvisy_paginator.serializers import Scalar, is_scalar

logger = logging.getLogger(__name__)

CHECKSUM_SIZE = 32
"""Size in bytes of one sha256 checksum."""

_TRAILING_LIMIT = re.compile(r"\s*LIMIT\s*\d+\s*;?\s*\Z", re.IGNORECASE)

_INVALID_FORMAT = "Invalid cursor: Invalid format"
_QUERY_MISMATCH = "Invalid cursor: This cursor was not generated for this query (or it has changed)"
_ATTRS_MISMATCH = (
    "Invalid cursor: This cursor was not generated for this set of query attrs (or it has changed)"
)
_ARITY_MISMATCH = "Invalid cursor: Invalid number of query attributes"


def strip_trailing_limit(signature: str) -> str:
    """Remove a trailing `LIMIT n` clause (and optional semicolon)."""
    return _TRAILING_LIMIT.sub("", signature)


def keep_signature(signature: str) -> str:
    """Hash the query text verbatim."""
    return signature


class CursorCodec:
    """Encodes keysets into cursors and validates cursors on the way back."""

    __slots__: ClassVar[tuple[str, str, str]] = (
        "_attribute_checksum",
        "_param_names",
        "_query_checksum",
    )

    _attribute_checksum: bytes
    _param_names: tuple[str, ...]
    _query_checksum: bytes

    def __init__(
        self,
        signature: str,
        param_names: Sequence[str],
        normalizer: SignatureNormalizer = strip_trailing_limit,
    ) -> None:
        self._param_names = tuple(param_names)
        self._query_checksum = hashlib.sha256(normalizer(signature).encode()).digest()
        self._attribute_checksum = hashlib.sha256("/".join(self._param_names).encode()).digest()

    @property
    def param_names(self) -> tuple[str, ...]:
        return self._param_names

    @property
    def query_checksum(self) -> bytes:
        return self._query_checksum

    @property
    def attribute_checksum(self) -> bytes:
        return self._attribute_checksum

    def encode(self, values: Sequence[Scalar]) -> str:
        """Encode keyset values, given in parameter-name order."""
        if len(values) != len(self._param_names):
            msg = (
                f"Expected {len(self._param_names)} cursor values "
                f"({', '.join(self._param_names)}), got {len(values)}"
            )
            raise ConfigurationError(msg)

        payload = json.dumps(list(values), separators=(",", ":")).encode()
        return base64.b64encode(self._query_checksum + self._attribute_checksum + payload).decode(
            "ascii"
        )

    def decode(self, token: str) -> dict[str, Scalar]:
        """Decode a cursor into a keyset keyed by parameter name.

        Raises InvalidCursorError if the token is malformed, or if it was
        produced for another query or another set of discriminators.
        """
        try:
            raw = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning("Rejected cursor: not valid base64")
            raise InvalidCursorError(_INVALID_FORMAT, source=e) from e

        if len(raw) < 2 * CHECKSUM_SIZE:
            logger.warning("Rejected cursor: payload too short (%d bytes)", len(raw))
            raise InvalidCursorError(_INVALID_FORMAT)

        query_checksum = raw[:CHECKSUM_SIZE]
        attribute_checksum = raw[CHECKSUM_SIZE : 2 * CHECKSUM_SIZE]

        if not hmac.compare_digest(self._query_checksum, query_checksum):
            logger.warning("Rejected cursor: query checksum mismatch")
            raise InvalidCursorError(_QUERY_MISMATCH)

        if not hmac.compare_digest(self._attribute_checksum, attribute_checksum):
            logger.warning("Rejected cursor: discriminator checksum mismatch")
            raise InvalidCursorError(_ATTRS_MISMATCH)

        values = self._decode_values(raw[2 * CHECKSUM_SIZE :])

        if len(values) != len(self._param_names):
            logger.warning(
                "Rejected cursor: %d values for %d discriminators",
                len(values),
                len(self._param_names),
            )
            raise InvalidCursorError(_ARITY_MISMATCH)

        return dict(zip(self._param_names, values, strict=True))

    @staticmethod
    def _decode_values(payload: bytes) -> list[Scalar]:
        try:
            values: object = json.loads(payload)
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning("Rejected cursor: embedded values are not valid JSON")
            raise InvalidCursorError(_INVALID_FORMAT, source=e) from e

        if not isinstance(values, list) or not all(is_scalar(v) for v in values):  # pyright: ignore[reportUnknownVariableType]
            logger.warning("Rejected cursor: embedded values are not a list of scalars")
            raise InvalidCursorError(_INVALID_FORMAT)

        return values  # pyright: ignore[reportUnknownVariableType]

    def __repr__(self) -> str:
        return f"CursorCodec(param_names={self._param_names!r})"
