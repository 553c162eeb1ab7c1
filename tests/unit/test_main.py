# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging

import pytest
from bce_sdk_signers.__main__ import main, sample_token

SAMPLE_TOKEN = (
    "bce-auth-v1/0b0f67dfb88244b289b72b142befad0c/2015-04-27T08:23:49Z/1800//"
    "a19e6386e990691aca1114a20357c83713f1cb4be3d74942bb4ed37469ecdacf"
)


def test_sample_token() -> None:
    assert sample_token() == SAMPLE_TOKEN


def test_main_prints_sample_token(capsys: pytest.CaptureFixture[str]) -> None:
    main([])
    assert capsys.readouterr().out == SAMPLE_TOKEN + "\n"


def test_main_verbose(
    capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG):
        main(["--verbose"])
    assert capsys.readouterr().out == SAMPLE_TOKEN + "\n"
    assert "x-bce-date:2015-04-27T08%3A23%3A49Z" in caplog.text
