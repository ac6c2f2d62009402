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
Google identity provider: reads the email claim from the id_token.
"""

import re

from authlib.common.encoding import to_bytes, urlsafe_b64decode
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from coreason_authproxy.exceptions import DecodeError, MalformedTokenError, ProviderError
from coreason_authproxy.models import ProviderData
from coreason_authproxy.providers.base import AuthExchangeResult, read_string_field, with_defaults
from coreason_authproxy.transport import parse_json_object
from coreason_authproxy.utils.logger import logger

tracer = trace.get_tracer(__name__)

GOOGLE_LOGIN_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_REDEEM_URL = "https://accounts.google.com/o/oauth2/token"
GOOGLE_SCOPE = "profile email"

# Unpadded base64url alphabet, as used in compact JWT segments
_BASE64URL_SEGMENT = re.compile(r"[A-Za-z0-9_-]*")


def decode_jwt_segment(segment: str) -> bytes:
    """
    Decodes one base64url segment of a compact JWT, restoring the omitted `=` padding.

    Raises:
        DecodeError: If the segment is not valid base64url.
    """
    if not _BASE64URL_SEGMENT.fullmatch(segment):
        raise DecodeError("Invalid base64url segment: character outside the base64url alphabet")
    try:
        return urlsafe_b64decode(to_bytes(segment))  # type: ignore[no-any-return]
    except ValueError as e:
        raise DecodeError(f"Invalid base64url segment: {e}") from e


class GoogleProviderIdentity:
    """
    Google OAuth2 provider, the default strategy.

    The email comes from the `email` claim of the id_token returned by the token
    endpoint. The signature is not checked here: the token was received directly
    from Google over TLS during the code exchange.
    """

    name = "google"

    def __init__(self, data: ProviderData) -> None:
        """
        Initialize the GoogleProviderIdentity.

        Args:
            data: Configured endpoints and scope. Unset values fall back to Google's defaults.
        """
        self.data = with_defaults(
            data,
            login_url=GOOGLE_LOGIN_URL,
            redeem_url=GOOGLE_REDEEM_URL,
            scope=GOOGLE_SCOPE,
        )

    @property
    def login_url(self) -> str:
        return str(self.data.login_url)

    @property
    def redeem_url(self) -> str:
        return str(self.data.redeem_url)

    @property
    def scope(self) -> str:
        return self.data.scope

    def close(self) -> None:
        """No-op: this provider holds no network resources."""

    def get_email_address(self, auth_result: AuthExchangeResult, access_token: str) -> str:
        """
        Extracts the email claim from the id_token of the exchange result.

        Args:
            auth_result: The decoded token endpoint response.
            access_token: Unused by this provider.

        Returns:
            str: The user's email address.

        Raises:
            FieldMissingError: If `id_token` or the `email` claim is missing.
            MalformedTokenError: If the id_token has fewer than two segments.
            DecodeError: If the payload segment is not valid base64url.
            ParseError: If the payload is not a JSON object.
        """
        with tracer.start_as_current_span("google.get_email_address") as span:
            try:
                id_token = read_string_field(auth_result, "id_token")

                # header.payload.signature
                segments = id_token.split(".")
                if len(segments) < 2:
                    raise MalformedTokenError("id_token is not a compact JWT (no payload segment)")

                claims = parse_json_object(decode_jwt_segment(segments[1]), "id_token payload")
                email = read_string_field(claims, "email")
            except ProviderError as e:
                logger.warning(f"Google email resolution failed: {e}")
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise

            span.set_status(Status(StatusCode.OK))
            return email
