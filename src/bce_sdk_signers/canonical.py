# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Canonical forms of the request components covered by a BCE v1 signature.

Every function here is pure. Signer and verifier must produce byte-identical output;
percent-encoding always goes through the fixed 256-entry lookup table below.
"""

from collections.abc import Mapping
from string import ascii_letters, digits
from typing import Final

from .exceptions import InvalidParameterException
from .interfaces.http import ParamValue

UNRESERVED_CHARACTERS: Final = frozenset(ascii_letters + digits + "-._~")

PERCENT_ENCODED_STRINGS: Final[tuple[str, ...]] = tuple(
    chr(byte) if chr(byte) in UNRESERVED_CHARACTERS else f"%{byte:02X}"
    for byte in range(256)
)
"""Encoded form of every byte value, indexed by the byte."""


def _to_bytes(value: str | bytes | int | float) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode("utf-8")


def url_encode(value: str | bytes | int | float) -> str:
    """Percent-encode every byte of ``value`` except ``A-Z a-z 0-9 - . _ ~``.

    Strings are encoded as UTF-8 first, other scalars are stringified.
    """
    return "".join(PERCENT_ENCODED_STRINGS[byte] for byte in _to_bytes(value))


def url_encode_except_slash(value: str | bytes | int | float) -> str:
    """Like :func:`url_encode` but leaves ``/`` untouched."""
    return url_encode(value).replace("%2F", "/")


def get_canonical_uri_path(path: str | None) -> str:
    if not path:
        return "/"
    if path.startswith("/"):
        return url_encode_except_slash(path)
    return "/" + url_encode_except_slash(path)


def get_canonical_query_string(params: Mapping[str, ParamValue]) -> str:
    """Build the canonical query string.

    An ``Authorization`` key (any case) is never signed. A ``None`` value yields
    ``key=``. The encoded ``key=value`` pairs are sorted as strings, not by key.

    :raises InvalidParameterException: If a key is ``None``.
    """
    if not params:
        return ""

    parameter_strings: list[str] = []
    for key, value in params.items():
        if key is None:
            raise InvalidParameterException("parameter key should not be None")
        if str(key).lower() == "authorization":
            continue
        if value is None:
            parameter_strings.append(f"{url_encode(key)}=")
        else:
            parameter_strings.append(f"{url_encode(key)}={url_encode(value)}")

    return "&".join(sorted(parameter_strings))


def get_canonical_headers(headers: Mapping[str, object]) -> str:
    """Build the canonical header block from an already selected set of headers.

    Entries with a ``None`` name are skipped, a ``None`` value is signed as the empty
    string. Names are trimmed and lowercased, values trimmed, and the encoded
    ``name:value`` lines are sorted and joined with newlines.
    """
    if not headers:
        return ""

    header_strings: list[str] = []
    for name, value in headers.items():
        if name is None:
            continue
        value = "" if value is None else str(value)
        header_strings.append(
            f"{url_encode(name.strip().lower())}:{url_encode(value.strip())}"
        )

    return "\n".join(sorted(header_strings))
