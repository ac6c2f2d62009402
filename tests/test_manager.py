# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authproxy

from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from coreason_authproxy.config import RawConfiguration
from coreason_authproxy.exceptions import FieldMissingError, InvalidConfigurationError
from coreason_authproxy.manager import IdentityManager
from coreason_authproxy.providers import GoogleProviderIdentity, MyUsaProviderIdentity


def test_invalid_configuration_refuses_to_start() -> None:
    """No provider is built and no client is opened for a broken configuration."""
    with patch("coreason_authproxy.manager.new_provider") as mock_factory:
        with pytest.raises(InvalidConfigurationError) as exc:
            IdentityManager(RawConfiguration(upstreams=["http://foo"], skip_auth_regex=["(bad"]))
    mock_factory.assert_not_called()
    assert "missing setting: cookie-secret" in str(exc.value)
    assert 'error compiling regex="(bad"' in str(exc.value)


def test_google_flow(raw_config: RawConfiguration, make_id_token: Callable[[dict[str, Any]], str]) -> None:
    with IdentityManager(raw_config) as manager:
        assert isinstance(manager.provider, GoogleProviderIdentity)
        assert manager.config.upstreams[0].path == "/"
        token = make_id_token({"email": "u@example.com"})
        assert manager.get_email_address({"id_token": token}, "at") == "u@example.com"


def test_myusa_flow_uses_injected_client(valid_settings: dict[str, Any]) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"email": "a@b.com"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    raw = RawConfiguration(**valid_settings, provider="myusa")

    with IdentityManager(raw, client=client) as manager:
        assert isinstance(manager.provider, MyUsaProviderIdentity)
        assert manager.provider.client is client
        assert manager.get_email_address({}, "tok") == "a@b.com"

    assert seen == ["https://alpha.my.usa.gov/api/v1/profile?access_token=tok"]
    assert not client.is_closed


def test_google_manager_opens_no_client(raw_config: RawConfiguration) -> None:
    """The Google provider reads the id_token locally, so no HTTP client is created."""
    with patch("httpx.Client") as mock_client:
        with IdentityManager(raw_config) as manager:
            assert isinstance(manager.provider, GoogleProviderIdentity)
    mock_client.assert_not_called()


def test_myusa_internal_client_closed_on_exit(valid_settings: dict[str, Any]) -> None:
    with IdentityManager(RawConfiguration(**valid_settings, provider="myusa")) as manager:
        assert isinstance(manager.provider, MyUsaProviderIdentity)
        internal = manager.provider.client
        assert not internal.is_closed
    assert internal.is_closed


@pytest.mark.parametrize(("setting", "expected"), [("", "google"), ("myusa", "myusa")])
def test_ready_log_names_provider(valid_settings: dict[str, Any], setting: str, expected: str) -> None:
    with patch("coreason_authproxy.manager.logger") as mock_logger:
        with IdentityManager(RawConfiguration(**valid_settings, provider=setting)) as manager:
            assert manager.provider.name == expected
    message = mock_logger.info.call_args.args[0]
    assert f"provider={expected}" in message
    assert "unknown" not in message


def test_provider_errors_propagate(raw_config: RawConfiguration) -> None:
    with IdentityManager(raw_config) as manager:
        with pytest.raises(FieldMissingError):
            manager.get_email_address({}, "at")
