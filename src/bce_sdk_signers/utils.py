# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime

ISO8601_SECONDS = "%Y-%m-%dT%H:%M:%SZ"


def ensure_utc(value: datetime) -> datetime:
    """Ensures that the given datetime is a UTC timezone-aware datetime.

    If the datetime isn't timezone-aware, its timezone is set to UTC. If it is aware,
    it's replaced with the equivalent datetime under UTC.

    :param value: A datetime object that may or may not be timezone-aware.
    :returns: A UTC timezone-aware equivalent datetime.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    else:
        return value.astimezone(UTC)


def serialize_timestamp(value: datetime) -> str:
    """Format ``value`` in UTC with second precision and a literal ``Z`` suffix.

    Sub-second precision is dropped, not rounded.
    """
    return ensure_utc(value).strftime(ISO8601_SECONDS)
