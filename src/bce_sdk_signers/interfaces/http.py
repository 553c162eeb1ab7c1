# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol, TypeAlias, runtime_checkable

ParamValue: TypeAlias = str | int | float | None
"""A query parameter value. ``None`` means the key is present without a value."""


class Field(Protocol):
    """A name-value pair representing a single header field in a request.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names may be normalized but should be preserved for accuracy during
    transmission.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Append a value to a field."""
        ...

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        ...

    def as_string(self, delimiter: str = ",") -> str:
        """Serialize the ``Field``'s values into a single line string."""
        ...


class Fields(Protocol):
    """Mapping of header fields keyed by their normalized name."""

    # Entries are keyed off the name of a provided Field
    entries: OrderedDict[str, Field]

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        ...

    def __setitem__(self, name: str, field: Field) -> None:
        """Set entry for a Field name."""
        ...

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        ...

    def __delitem__(self, name: str) -> None:
        """Delete entry from collection."""
        ...

    def __iter__(self) -> Iterator[Field]:
        """Allow iteration over entries."""
        ...

    def __len__(self) -> int:
        """Get total number of Field entries."""
        ...

    def __contains__(self, key: str) -> bool:
        """Whether a field with the normalized name is present."""
        ...


@runtime_checkable
class URI(Protocol):
    """Universal Resource Identifier, target location for a :py:class:`Request`."""

    scheme: str
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``bj.bcebos.com``."""

    port: int | None
    """An explicit port number."""

    path: str | None
    """Path component of the URI."""

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form ``{scheme}://{host}:{port}{path}``
        """
        ...

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``"""
        ...


class Request(Protocol):
    """Representation of a request as consumed by the signer."""

    destination: URI
    method: str
    params: Mapping[str, ParamValue]
    fields: Fields
    body: Iterable[bytes] | None
