# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""URL tokens for live sessions protected by a push or play security policy.

Each token is a hex encoded HMAC-SHA256, keyed by the security policy's auth key,
over a plain text that ends in ``;{expire}``. The token and the expire string are
then appended to the push or play URL as ``?token={token}&expire={expire}``.
"""

import hmac
from datetime import UTC, datetime, timedelta
from hashlib import sha256

from .utils import serialize_timestamp

DEFAULT_EXPIRE_IN_MINUTES = 120


def format_expire_time(value: datetime) -> str:
    return serialize_timestamp(value)


def expire_after(
    minutes: int = DEFAULT_EXPIRE_IN_MINUTES, now: datetime | None = None
) -> str:
    """Expire string for a token valid ``minutes`` from ``now`` (default: current
    UTC time)."""
    if now is None:
        now = datetime.now(UTC)
    return format_expire_time(now + timedelta(minutes=minutes))


def _token(plain_text: str, key: str) -> str:
    return hmac.new(key.encode("utf-8"), plain_text.encode("utf-8"), sha256).hexdigest()


def hls_play_token(session_id: str, expire: str, key: str) -> str:
    return _token(f"/{session_id}/live.m3u8;{expire}", key)


def rtmp_play_token(session_id: str, expire: str, key: str) -> str:
    return _token(f"{session_id};{expire}", key)


def push_token(push_stream: str, expire: str, key: str) -> str:
    return _token(f"{push_stream};{expire}", key)


def with_token(url: str, token: str, expire: str) -> str:
    """Append ``token`` and ``expire`` to ``url`` as its query string."""
    return f"{url}?token={token}&expire={expire}"
