# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Print the authorization token of a fixed sample request.

The output is fully determined by the hardcoded inputs and serves as a regression
fixture for other implementations of the algorithm.
"""

import argparse
import logging
from collections.abc import Sequence

from ._identity import BCECredentialIdentity
from .signers import BCEV1Signer, BCEV1SigningProperties

SAMPLE_IDENTITY = BCECredentialIdentity(
    access_key_id="0b0f67dfb88244b289b72b142befad0c",
    secret_access_key="bad522c2126a4618a8125f4b6cf6356f",
)
SAMPLE_METHOD = "PUT"
SAMPLE_PATH = "/v1/test/myfolder/readme.txt"
SAMPLE_HEADERS = {
    "Host": "bj.bcebos.com",
    "Content-Length": 8,
    "Content-MD5": "0a52730597fb4ffa01fc117d9e71e3a9",
    "Content-Type": "text/plain",
    "x-bce-date": "2015-04-27T08:23:49Z",
}
SAMPLE_PARAMS = {"partNumber": 9, "uploadId": "VXBsb2FkIElpZS5tMnRzIHVwbG9hZA"}
SAMPLE_TIMESTAMP = 1430123029


def sample_token() -> str:
    return BCEV1Signer().sign(
        identity=SAMPLE_IDENTITY,
        method=SAMPLE_METHOD,
        path=SAMPLE_PATH,
        headers=SAMPLE_HEADERS,
        params=SAMPLE_PARAMS,
        properties=BCEV1SigningProperties(timestamp=SAMPLE_TIMESTAMP),
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="python -m bce_sdk_signers", description=__doc__
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the canonical request to stderr",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    print(sample_token())


if __name__ == "__main__":
    main()
