# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class BaseBCESDKException(Exception):
    """Top-level exception to capture SDK-related errors."""


class InvalidParameterException(BaseBCESDKException, ValueError):
    """A request parameter can't be canonicalized, for example a ``None`` key."""


class MissingCredentialsException(BaseBCESDKException):
    """No usable credential pair could be resolved."""
