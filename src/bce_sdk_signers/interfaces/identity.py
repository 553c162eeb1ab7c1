# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Identity(Protocol):
    """An entity available to the client representing who the user is."""


@runtime_checkable
class BCECredentialsIdentity(Identity, Protocol):
    """BCE Credentials Identity."""

    access_key_id: str
    """A unique identifier for a BCE user, embedded in every authorization token."""

    secret_access_key: str
    """A secret key used in conjunction with the access key ID to derive signing
    keys. It is only ever used as HMAC input."""
