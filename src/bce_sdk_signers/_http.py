# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator, Mapping
from copy import deepcopy
from dataclasses import dataclass
from functools import cached_property
from urllib.parse import urlunparse

import bce_sdk_signers.interfaces.http as interfaces_http
from bce_sdk_signers.interfaces.http import ParamValue


class Field(interfaces_http.Field):
    """A name-value pair representing a single header field in an HTTP Request.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names may be normalized but should be preserved for accuracy during
    transmission.
    """

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_string(self, delimiter: str = ",") -> str:
        """Get delimited string of all values.

        If the ``Field`` has zero values, the empty string is returned. If the ``Field``
        has exactly one value, the value is returned unmodified. Multiple values are
        joined with ``delimiter``, quoting any value that contains a comma or a double
        quote.
        """
        value_count = len(self.values)
        if value_count == 0:
            return ""
        if value_count == 1:
            return self.values[0]
        return delimiter.join(quote_and_escape_field_value(val) for val in self.values)

    def __eq__(self, other: object) -> bool:
        """Name and values must match.

        Values order must match.
        """
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, value={self.values!r})"


class Fields(interfaces_http.Fields):
    def __init__(self, initial: Iterable[interfaces_http.Field] | None = None):
        """Collection of header entries mapped by name.

        :param initial: Initial list of ``Field`` objects. ``Field``s can also be added
        and later removed.
        """
        init_fields = list(initial) if initial is not None else []
        init_field_names = [self._normalize_field_name(fld.name) for fld in init_fields]
        fname_counter = Counter(init_field_names)
        repeated_names_exist = (
            len(init_fields) > 0 and fname_counter.most_common(1)[0][1] > 1
        )
        if repeated_names_exist:
            non_unique_names = [name for name, num in fname_counter.items() if num > 1]
            raise ValueError(
                "Field names of the initial list of fields must be unique. The "
                "following normalized field names appear more than once: "
                f"{', '.join(non_unique_names)}."
            )
        init_tuples = zip(init_field_names, init_fields)
        self.entries: OrderedDict[str, interfaces_http.Field] = OrderedDict(init_tuples)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, object]) -> Fields:
        """Build a collection from a plain ``name -> value`` mapping.

        Values are stringified, ``None`` becomes the empty string.
        """
        return cls(
            Field(name=name, values=["" if value is None else str(value)])
            for name, value in headers.items()
        )

    def set_field(self, field: interfaces_http.Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        self.__setitem__(field.name, field)

    def __setitem__(self, name: str, field: interfaces_http.Field) -> None:
        """Set or override entry for a Field name."""
        normalized_name = self._normalize_field_name(name)
        normalized_field_name = self._normalize_field_name(field.name)
        if normalized_name != normalized_field_name:
            raise ValueError(
                f"Supplied key {name} does not match Field.name "
                f"provided: {normalized_field_name}"
            )
        self.entries[normalized_name] = field

    def get(
        self, key: str, default: interfaces_http.Field | None = None
    ) -> interfaces_http.Field | None:
        return self[key] if key in self else default

    def __getitem__(self, name: str) -> interfaces_http.Field:
        """Retrieve Field entry."""
        normalized_name = self._normalize_field_name(name)
        return self.entries[normalized_name]

    def __delitem__(self, name: str) -> None:
        """Delete entry from collection."""
        normalized_name = self._normalize_field_name(name)
        del self.entries[normalized_name]

    def as_mapping(self) -> dict[str, str]:
        """Flatten into a ``name -> value`` dict keeping the original name casing."""
        return {field.name: field.as_string() for field in self}

    def _normalize_field_name(self, name: str) -> str:
        """Normalize field names.

        For use as key in ``entries``.
        """
        return name.lower()

    def __eq__(self, other: object) -> bool:
        """Entries must match in values and order."""
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __iter__(self) -> Iterator[interfaces_http.Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Universal Resource Identifier, target location for a :py:class:`BCERequest`."""

    scheme: str = "http"
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``bj.bcebos.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI."""

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``

        ``port`` is only included if set.
        """
        return self._netloc

    # cached_property does NOT behave like property, it actually allows for setting.
    # Therefore we need a layer of indirection.
    @cached_property
    def _netloc(self) -> str:
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.host

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form ``{scheme}://{host}:{port}{path}``
        """
        components = (self.scheme, self.netloc, self.path or "", "", "", "")
        return urlunparse(components)


class BCERequest(interfaces_http.Request):
    def __init__(
        self,
        *,
        destination: URI,
        method: str,
        fields: Fields,
        params: Mapping[str, ParamValue] | None = None,
        body: Iterable[bytes] | None = None,
    ):
        self.destination = destination
        self.method = method
        self.fields = fields
        self.params: dict[str, ParamValue] = dict(params) if params else {}
        self.body = body

    def __deepcopy__(self, memo: dict[int, BCERequest] | None = None) -> BCERequest:
        if memo is None:
            memo = {}

        if id(self) in memo:
            return memo[id(self)]

        # the destination doesn't need to be copied because it's immutable
        # the body can't be copied because it may be an iterator
        new_instance = self.__class__(
            destination=self.destination,
            method=self.method,
            fields=deepcopy(self.fields, memo),
            params=dict(self.params),
            body=self.body,
        )
        memo[id(self)] = new_instance
        return new_instance


def quote_and_escape_field_value(value: str) -> str:
    """Escapes and quotes a single :class:`Field` value if necessary.

    See :func:`Field.as_string` for quoting and escaping logic.
    """
    chars_to_quote = (",", '"')
    if any(char in chars_to_quote for char in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    else:
        return value
