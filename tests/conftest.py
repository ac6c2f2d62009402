# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authproxy

import base64
import json
import os
from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import patch

import pytest

from coreason_authproxy.config import RawConfiguration


@pytest.fixture(autouse=True)
def clean_proxy_env() -> Generator[None, None, None]:
    """
    Removes COREASON_PROXY_* variables so RawConfiguration only sees what a test passes in.
    """
    with patch.dict(os.environ):
        for key in list(os.environ):
            if key.upper().startswith("COREASON_PROXY_"):
                del os.environ[key]
        yield


@pytest.fixture
def valid_settings() -> dict[str, Any]:
    return {
        "upstreams": ["http://127.0.0.1:8080"],
        "cookie_secret": "cookie-secret",
        "client_id": "client-id",
        "client_secret": "client-secret",
    }


@pytest.fixture
def raw_config(valid_settings: dict[str, Any]) -> RawConfiguration:
    return RawConfiguration(**valid_settings)


def b64url(data: bytes) -> str:
    """base64url without padding, as used in compact JWTs."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@pytest.fixture
def make_id_token() -> Callable[[dict[str, Any]], str]:
    """Builds an unsigned compact token whose payload segment is the given claims."""

    def _make(claims: dict[str, Any]) -> str:
        header = b64url(json.dumps({"alg": "RS256", "typ": "JWT"}).encode())
        payload = b64url(json.dumps(claims).encode())
        return f"{header}.{payload}.c2lnbmF0dXJl"

    return _make
