# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
# ruff: noqa: S101
import datetime
import hmac
import logging
from collections.abc import Mapping, Sequence
from copy import deepcopy
from hashlib import sha256
from typing import Final, TypedDict

from ._http import BCERequest, Field
from ._identity import BCECredentialIdentity
from .canonical import (
    get_canonical_headers,
    get_canonical_query_string,
    get_canonical_uri_path,
)
from .interfaces.http import ParamValue
from .interfaces.identity import BCECredentialsIdentity as _BCECredentialsIdentity
from .utils import ISO8601_SECONDS, ensure_utc, serialize_timestamp

logger: Final = logging.getLogger(__name__)

BCE_AUTH_VERSION: Final = "bce-auth-v1"
BCE_PREFIX: Final = "x-bce-"
BCE_DATE_HEADER: Final = "x-bce-date"
BCE_TIMESTAMP_FORMAT: Final = ISO8601_SECONDS

DEFAULT_EXPIRATION_IN_SECONDS: Final = 1800
MIN_EXPIRATION_IN_SECONDS: Final = 300
MAX_EXPIRATION_IN_SECONDS: Final = 129600

# Signed when the caller doesn't name headers explicitly, together with every
# header starting with BCE_PREFIX.
DEFAULT_HEADERS_TO_SIGN: Final[frozenset[str]] = frozenset(
    ("host", "content-length", "content-type", "content-md5")
)


class BCEV1SigningProperties(TypedDict, total=False):
    expiration_in_seconds: int
    timestamp: datetime.datetime | int | float
    headers_to_sign: Sequence[str] | None


def is_default_header_to_sign(header: str) -> bool:
    header = header.strip().lower()
    return header in DEFAULT_HEADERS_TO_SIGN or header.startswith(BCE_PREFIX)


def get_headers_to_sign(
    headers: Mapping[str, object], headers_to_sign: Sequence[str] | None = None
) -> dict[str, object]:
    """Select the headers that go into the canonical header block.

    Headers whose trimmed value is empty are never signed. Names are trimmed and
    lowercased, a later duplicate overwrites an earlier one. With an explicit
    ``headers_to_sign`` exactly the named headers are kept, whether or not they are
    default headers; otherwise :func:`is_default_header_to_sign` decides.
    """
    normalized: dict[str, object] = {}
    for name, value in headers.items():
        if name is None:
            continue
        if ("" if value is None else str(value)).strip() == "":
            continue
        normalized[name.strip().lower()] = value

    if headers_to_sign is not None:
        allowed = {name.strip().lower() for name in headers_to_sign}
        return {name: value for name, value in normalized.items() if name in allowed}

    return {
        name: value
        for name, value in normalized.items()
        if is_default_header_to_sign(name)
    }


class BCEV1Signer:
    """Request signer for the BCE authentication v1 (``bce-auth-v1``) algorithm."""

    def sign(
        self,
        *,
        identity: BCECredentialIdentity,
        method: str,
        path: str | None,
        headers: Mapping[str, object] | None = None,
        params: Mapping[str, ParamValue] | None = None,
        properties: BCEV1SigningProperties | None = None,
    ) -> str:
        """Generate the authorization token for a request.

        The token is meant to be sent verbatim as the ``Authorization`` header:
        ``bce-auth-v1/{ak}/{timestamp}/{expiration}/{signed headers}/{signature}``.

        :param identity: The credential pair to sign with.
        :param method: HTTP method, used as given.
        :param path: Raw request path.
        :param headers: Request headers. Values are stringified.
        :param params: Query parameters. A ``None`` value means "present, no value".
        :param properties: Optional expiration, timestamp and header allowlist.
        :raises InvalidParameterException: If a query parameter key is ``None``.
        """
        self._validate_identity(identity=identity)
        new_properties = self._normalize_signing_properties(
            properties=properties or BCEV1SigningProperties()
        )
        headers_to_sign = new_properties.get("headers_to_sign")

        auth_string = self.authentication_string(
            access_key_id=identity.access_key_id, properties=new_properties
        )
        signing_key = self._hash(key=identity.secret_access_key, value=auth_string)

        canonical_request = self.canonical_request(
            method=method,
            path=path,
            headers=headers or {},
            params=params or {},
            headers_to_sign=headers_to_sign,
        )
        logger.debug("Canonical request for %s:\n%s", auth_string, canonical_request)
        signature = self._hash(key=signing_key, value=canonical_request)

        # Only an explicit allowlist is echoed back. Default-selected headers are
        # signed but not listed, verifiers have to apply the default rule themselves.
        signed_headers: list[str] = []
        if headers_to_sign is not None:
            signed_headers = [name.strip().lower() for name in headers_to_sign]

        return self.generate_authorization_token(
            auth_string=auth_string,
            signed_headers=signed_headers,
            signature=signature,
        )

    def sign_request(
        self,
        *,
        request: BCERequest,
        identity: BCECredentialIdentity,
        properties: BCEV1SigningProperties | None = None,
    ) -> BCERequest:
        """Generate and apply a BCE v1 signature to a copy of the supplied request.

        ``Host`` and ``x-bce-date`` fields are added to the copy when missing, so both
        end up in the default signed header set.

        :param request: A BCERequest to sign prior to sending to the service.
        :param identity: The credential pair to sign with.
        :param properties: Optional expiration, timestamp and header allowlist.
        """
        new_properties = self._normalize_signing_properties(
            properties=properties or BCEV1SigningProperties()
        )
        new_request = deepcopy(request)
        self._apply_required_fields(request=new_request, properties=new_properties)

        token = self.sign(
            identity=identity,
            method=new_request.method,
            path=new_request.destination.path,
            headers=new_request.fields.as_mapping(),
            params=new_request.params,
            properties=new_properties,
        )
        new_request.fields.set_field(self.generate_authorization_field(token=token))
        return new_request

    def authentication_string(
        self, *, access_key_id: str, properties: BCEV1SigningProperties
    ) -> str:
        """The time-scoped prefix shared by the signing key and the final token.

        Defined as ``bce-auth-v1/{access_key_id}/{timestamp}/{expiration_in_seconds}``
        with a second-precision UTC timestamp.
        """
        new_properties = self._normalize_signing_properties(properties=properties)
        timestamp = self._format_timestamp(new_properties["timestamp"])
        expiration = new_properties["expiration_in_seconds"]
        return f"{BCE_AUTH_VERSION}/{access_key_id}/{timestamp}/{expiration}"

    def canonical_request(
        self,
        *,
        method: str,
        path: str | None,
        headers: Mapping[str, object],
        params: Mapping[str, ParamValue],
        headers_to_sign: Sequence[str] | None = None,
    ) -> str:
        """The canonical request is the string the final signature is computed over.
        It is useful to compare against a verifier's to find signature mismatches.

        Defined as:
            <HTTPMethod>\n
            <CanonicalURI>\n
            <CanonicalQueryString>\n
            <CanonicalHeaders>
        """
        canonical_path = get_canonical_uri_path(path)
        canonical_query = get_canonical_query_string(params)
        canonical_headers = get_canonical_headers(
            get_headers_to_sign(headers, headers_to_sign)
        )
        return f"{method}\n{canonical_path}\n{canonical_query}\n{canonical_headers}"

    def generate_authorization_token(
        self, *, auth_string: str, signed_headers: Sequence[str], signature: str
    ) -> str:
        return f"{auth_string}/{';'.join(signed_headers)}/{signature}"

    def generate_authorization_field(self, *, token: str) -> Field:
        """Generate the `Authorization` field carrying ``token``."""
        return Field(name="Authorization", values=[token])

    def _hash(self, *, key: str, value: str) -> str:
        # Both HMAC passes are keyed by text: the secret key, then the hex encoded
        # signing key rather than its raw digest.
        return hmac.new(
            key=key.encode("utf-8"), msg=value.encode("utf-8"), digestmod=sha256
        ).hexdigest()

    def _validate_identity(self, *, identity: BCECredentialIdentity) -> None:
        """Perform runtime checks before attempting signing."""
        if not isinstance(identity, _BCECredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"BCECredentialIdentity but received {type(identity)}."
            )
        if not identity.access_key_id or not identity.secret_access_key:
            raise ValueError(
                "Both access_key_id and secret_access_key must be non-empty."
            )

    def _normalize_signing_properties(
        self, *, properties: BCEV1SigningProperties
    ) -> BCEV1SigningProperties:
        # Create copy of signing properties to avoid mutating the original
        new_properties = BCEV1SigningProperties(**properties)

        if new_properties.get("expiration_in_seconds") is None:
            new_properties["expiration_in_seconds"] = DEFAULT_EXPIRATION_IN_SECONDS
        expiration = new_properties["expiration_in_seconds"]
        if not MIN_EXPIRATION_IN_SECONDS <= expiration <= MAX_EXPIRATION_IN_SECONDS:
            logger.debug(
                "expiration_in_seconds=%s is outside [%s, %s], signing anyway.",
                expiration,
                MIN_EXPIRATION_IN_SECONDS,
                MAX_EXPIRATION_IN_SECONDS,
            )

        timestamp = new_properties.get("timestamp")
        if timestamp is None:
            new_properties["timestamp"] = datetime.datetime.now(datetime.UTC)
        elif isinstance(timestamp, int | float):
            new_properties["timestamp"] = datetime.datetime.fromtimestamp(
                timestamp, datetime.UTC
            )
        else:
            new_properties["timestamp"] = ensure_utc(timestamp)

        return new_properties

    def _format_timestamp(self, timestamp: datetime.datetime | int | float) -> str:
        assert isinstance(timestamp, datetime.datetime)
        return serialize_timestamp(timestamp)

    def _apply_required_fields(
        self, *, request: BCERequest, properties: BCEV1SigningProperties
    ) -> None:
        if "Host" not in request.fields:
            request.fields.set_field(
                Field(name="Host", values=[request.destination.netloc])
            )
        if BCE_DATE_HEADER not in request.fields:
            assert "timestamp" in properties
            request.fields.set_field(
                Field(
                    name=BCE_DATE_HEADER,
                    values=[self._format_timestamp(properties["timestamp"])],
                )
            )
