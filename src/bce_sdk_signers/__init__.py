# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""BCE SDK Signers provides stand-alone ``bce-auth-v1`` request signing for use with
HTTP tools such as AioHTTP, Curl, Requests, urllib3, etc."""

from __future__ import annotations

from ._http import BCERequest, Field, Fields, URI
from ._identity import (
    BCECredentialIdentity,
    EnvironmentCredentialsResolver,
    StaticCredentialsResolver,
)
from .signers import BCEV1Signer, BCEV1SigningProperties

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "BCECredentialIdentity",
    "BCERequest",
    "BCEV1Signer",
    "BCEV1SigningProperties",
    "EnvironmentCredentialsResolver",
    "Field",
    "Fields",
    "StaticCredentialsResolver",
)
