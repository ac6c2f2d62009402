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
Custom exceptions for the coreason-authproxy package.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coreason_authproxy.models import ConfigError


class AuthProxyError(Exception):
    """Base exception for all coreason-authproxy errors."""


class InvalidConfigurationError(AuthProxyError):
    """
    Raised when the raw configuration has one or more violations.
    The full list is available on `errors`; the message is the multi-line report.
    """

    def __init__(self, message: str, errors: "list[ConfigError]") -> None:
        super().__init__(message)
        self.errors = errors


class ProviderError(AuthProxyError):
    """
    Raised when an identity provider cannot resolve the user's email.
    Scoped to a single authentication attempt.
    """


class FieldMissingError(ProviderError):
    """Raised when a required field is absent from a JSON document or is not a string."""

    def __init__(self, field: str) -> None:
        super().__init__(f"field {field!r} is missing or not a string")
        self.field = field


class MalformedTokenError(ProviderError):
    """Raised when the id_token is not a dot-separated compact token."""


class DecodeError(ProviderError):
    """Raised when a token segment is not valid base64url."""


class ParseError(ProviderError):
    """Raised when a payload or response body is not a JSON object."""


class RequestBuildError(ProviderError):
    """Raised when the profile request cannot be constructed (e.g. malformed profile URL)."""


class TransportError(ProviderError):
    """Raised on network failure or a non-success HTTP status."""


class OversizedResponseError(TransportError):
    """Raised when an HTTP response is too large."""
