# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import os
from dataclasses import dataclass, field
from typing import Final

from .exceptions import MissingCredentialsException
from .interfaces.identity import BCECredentialsIdentity

logger: Final = logging.getLogger(__name__)

ACCESS_KEY_ID_ENV_VAR: Final = "BCE_ACCESS_KEY_ID"
SECRET_ACCESS_KEY_ENV_VAR: Final = "BCE_SECRET_ACCESS_KEY"


@dataclass(kw_only=True)
class BCECredentialIdentity(BCECredentialsIdentity):
    access_key_id: str
    secret_access_key: str = field(repr=False)


class StaticCredentialsResolver:
    """Resolve static BCE credentials."""

    def __init__(self, *, credentials: BCECredentialIdentity) -> None:
        self._credentials = credentials

    def get_identity(self) -> BCECredentialIdentity:
        return self._credentials


class EnvironmentCredentialsResolver:
    """Resolves BCE credentials from system environment variables."""

    def __init__(self) -> None:
        self._credentials: BCECredentialIdentity | None = None

    def get_identity(self) -> BCECredentialIdentity:
        if self._credentials is not None:
            return self._credentials

        access_key_id = os.getenv(ACCESS_KEY_ID_ENV_VAR)
        secret_access_key = os.getenv(SECRET_ACCESS_KEY_ENV_VAR)

        if not access_key_id or not secret_access_key:
            raise MissingCredentialsException(
                f"{ACCESS_KEY_ID_ENV_VAR} and {SECRET_ACCESS_KEY_ENV_VAR} are required"
            )

        logger.debug("Resolved BCE credentials from environment variables.")
        self._credentials = BCECredentialIdentity(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
        )
        return self._credentials
