# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authproxy

"""
The identity provider contract shared by every provider strategy.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from coreason_authproxy.exceptions import FieldMissingError
from coreason_authproxy.models import ProviderData
from coreason_authproxy.validator import parse_url

# Decoded JSON body of the OAuth2 token endpoint response. Read-only.
AuthExchangeResult = Mapping[str, Any]


@runtime_checkable
class ProviderIdentity(Protocol):
    """
    Protocol implemented by every identity provider.

    A single instance is shared by all concurrently handled callbacks, so
    implementations must not write to instance state after construction.
    """

    # Provider discriminator, e.g. "google"
    name: str

    @property
    def login_url(self) -> str:
        """Absolute URL the browser is redirected to for authorization."""
        ...

    @property
    def redeem_url(self) -> str:
        """Absolute URL used to exchange the authorization code."""
        ...

    @property
    def scope(self) -> str:
        """OAuth2 scope string requested during authorization."""
        ...

    def get_email_address(self, auth_result: AuthExchangeResult, access_token: str) -> str:
        """
        Resolves the authenticated user's email address.

        Raises:
            ProviderError: If the email cannot be resolved. Authentication is then not complete.
        """
        ...

    def close(self) -> None:
        """Releases any resources the provider created for itself."""
        ...


def with_defaults(
    data: ProviderData,
    *,
    login_url: str,
    redeem_url: str,
    scope: str,
    profile_url: str | None = None,
) -> ProviderData:
    """
    Returns a copy of `data` with unset endpoints and scope replaced by provider defaults.
    Values the operator supplied are kept.
    """
    return ProviderData(
        login_url=data.login_url if data.login_url is not None else parse_url(login_url),
        redeem_url=data.redeem_url if data.redeem_url is not None else parse_url(redeem_url),
        profile_url=(
            data.profile_url
            if data.profile_url is not None or profile_url is None
            else parse_url(profile_url)
        ),
        scope=data.scope or scope,
    )


def read_string_field(document: Mapping[str, Any], field: str) -> str:
    """
    Reads a string field from a decoded JSON object.

    Raises:
        FieldMissingError: If the field is absent or not a string.
    """
    value = document.get(field)
    if not isinstance(value, str):
        raise FieldMissingError(field)
    return value
