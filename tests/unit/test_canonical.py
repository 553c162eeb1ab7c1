# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import string

import pytest
from bce_sdk_signers.canonical import (
    PERCENT_ENCODED_STRINGS,
    get_canonical_headers,
    get_canonical_query_string,
    get_canonical_uri_path,
    url_encode,
    url_encode_except_slash,
)
from bce_sdk_signers.exceptions import InvalidParameterException

UNRESERVED = string.ascii_letters + string.digits + "-._~"


def test_encoding_table_covers_every_byte() -> None:
    assert len(PERCENT_ENCODED_STRINGS) == 256
    assert sum(1 for entry in PERCENT_ENCODED_STRINGS if len(entry) == 1) == 66
    for byte in range(256):
        expected = chr(byte) if chr(byte) in UNRESERVED else f"%{byte:02X}"
        assert url_encode(bytes([byte])) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", ""),
        ("abcXYZ019-._~", "abcXYZ019-._~"),
        ("a b", "a%20b"),
        ("a+b=c&d", "a%2Bb%3Dc%26d"),
        ("/", "%2F"),
        ("*", "%2A"),
        ("é", "%C3%A9"),
        ("中", "%E4%B8%AD"),
        (9, "9"),
        (b"\xff", "%FF"),
    ],
)
def test_url_encode(value: str | bytes | int, expected: str) -> None:
    assert url_encode(value) == expected


def test_url_encode_uses_uppercase_hex() -> None:
    assert url_encode("\n:") == "%0A%3A"


def test_url_encode_except_slash() -> None:
    assert url_encode_except_slash("/a b/c:d") == "/a%20b/c%3Ad"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", "/"),
        (None, "/"),
        ("/", "/"),
        ("/a/b c/d", "/a/b%20c/d"),
        ("a/b", "/a/b"),
        ("/v1/test/myfolder/readme.txt", "/v1/test/myfolder/readme.txt"),
        ("//double", "//double"),
        ("/a?b", "/a%3Fb"),
    ],
)
def test_get_canonical_uri_path(path: str | None, expected: str) -> None:
    assert get_canonical_uri_path(path) == expected


class TestCanonicalQueryString:
    def test_empty(self) -> None:
        assert get_canonical_query_string({}) == ""

    def test_sorted_by_encoded_pair(self) -> None:
        assert get_canonical_query_string({"b": "2", "a": "1"}) == "a=1&b=2"

    def test_sort_uses_encoded_form_not_key(self) -> None:
        # "-" (0x2D) sorts before "=" (0x3D) and uppercase before lowercase
        params = {"a-b": "1", "a": "2", "A": "3"}
        assert get_canonical_query_string(params) == "A=3&a-b=1&a=2"

    @pytest.mark.parametrize("key", ["Authorization", "authorization", "AUTHORIZATION"])
    def test_authorization_is_dropped(self, key: str) -> None:
        params = {key: "token", "b": "2"}
        assert get_canonical_query_string(params) == "b=2"

    def test_none_value_keeps_key(self) -> None:
        assert get_canonical_query_string({"acl": None, "a": "1"}) == "a=1&acl="

    def test_empty_value_keeps_key(self) -> None:
        assert get_canonical_query_string({"acl": ""}) == "acl="

    def test_values_are_stringified_and_encoded(self) -> None:
        params = {"partNumber": 9, "uploadId": "a b/c"}
        assert (
            get_canonical_query_string(params) == "partNumber=9&uploadId=a%20b%2Fc"
        )

    def test_none_key_is_rejected(self) -> None:
        with pytest.raises(InvalidParameterException):
            get_canonical_query_string({None: "1", "a": "2"})  # type: ignore

    def test_none_key_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            get_canonical_query_string({None: None})  # type: ignore


class TestCanonicalHeaders:
    def test_empty(self) -> None:
        assert get_canonical_headers({}) == ""

    def test_sorted_lowercased_and_encoded(self) -> None:
        headers = {
            "Host": "bj.bcebos.com",
            "Content-Type": "text/plain",
            "x-bce-date": "2015-04-27T08:23:49Z",
            "Content-Length": 8,
        }
        assert get_canonical_headers(headers) == (
            "content-length:8\n"
            "content-type:text%2Fplain\n"
            "host:bj.bcebos.com\n"
            "x-bce-date:2015-04-27T08%3A23%3A49Z"
        )

    def test_name_and_value_are_trimmed(self) -> None:
        assert get_canonical_headers({"  X-Bce-Meta  ": "  v a  "}) == (
            "x-bce-meta:v%20a"
        )

    def test_none_name_is_skipped(self) -> None:
        assert get_canonical_headers({None: "x", "host": "h"}) == "host:h"  # type: ignore

    def test_none_value_is_empty(self) -> None:
        assert get_canonical_headers({"host": None}) == "host:"

    def test_normalized_headers_reproduce_same_block(self) -> None:
        headers = {"Host ": " bj.bcebos.com ", "X-Bce-Date": "2015-04-27T08:23:49Z"}
        normalized = {
            name.strip().lower(): value.strip() for name, value in headers.items()
        }
        first = get_canonical_headers(headers)
        assert get_canonical_headers(normalized) == first
