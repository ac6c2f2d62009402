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
MyUSA identity provider: fetches the email from the profile API.
"""

from urllib.parse import urlencode

import httpx
from opentelemetry import trace
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.trace import Status, StatusCode

from coreason_authproxy.exceptions import ProviderError, RequestBuildError
from coreason_authproxy.models import ProviderData
from coreason_authproxy.providers.base import AuthExchangeResult, read_string_field, with_defaults
from coreason_authproxy.transport import api_request
from coreason_authproxy.utils.logger import logger

tracer = trace.get_tracer(__name__)

MYUSA_HOST = "alpha.my.usa.gov"
MYUSA_LOGIN_URL = f"https://{MYUSA_HOST}/oauth/authorize"
MYUSA_REDEEM_URL = f"https://{MYUSA_HOST}/oauth/token"
MYUSA_PROFILE_URL = f"https://{MYUSA_HOST}/api/v1/profile"
MYUSA_SCOPE = "profile.email"


class MyUsaProviderIdentity:
    """
    MyUSA OAuth2 provider.

    The email is read from the profile API, authorized with the access token.
    One blocking GET is issued per call; timeouts belong to the injected client.
    """

    name = "myusa"

    def __init__(self, data: ProviderData, client: httpx.Client | None = None) -> None:
        """
        Initialize the MyUsaProviderIdentity.

        Args:
            data: Configured endpoints and scope. Unset values fall back to MyUSA's defaults.
            client: HTTP client for the profile fetch (optional). If not provided, one is
                created and owned by this instance; release it with `close()`.
        """
        self.data = with_defaults(
            data,
            login_url=MYUSA_LOGIN_URL,
            redeem_url=MYUSA_REDEEM_URL,
            profile_url=MYUSA_PROFILE_URL,
            scope=MYUSA_SCOPE,
        )
        self._internal_client = client is None
        if client is None:
            client = httpx.Client()
            HTTPXClientInstrumentor().instrument_client(client)
        self.client = client

    @property
    def login_url(self) -> str:
        return str(self.data.login_url)

    @property
    def redeem_url(self) -> str:
        return str(self.data.redeem_url)

    @property
    def profile_url(self) -> str:
        return str(self.data.profile_url)

    @property
    def scope(self) -> str:
        return self.data.scope

    def close(self) -> None:
        """Closes the HTTP client if this instance created it."""
        if self._internal_client:
            self.client.close()

    def _build_profile_request(self, access_token: str) -> httpx.Request:
        url = f"{self.profile_url}?{urlencode({'access_token': access_token})}"
        try:
            request = self.client.build_request("GET", url)
        except httpx.InvalidURL as e:
            raise RequestBuildError(f"Invalid profile URL: {e}") from e

        if request.url.scheme not in ("http", "https") or not request.url.host:
            raise RequestBuildError(f"Profile URL must be an absolute http(s) URL, got {self.profile_url!r}")
        return request

    def get_email_address(self, auth_result: AuthExchangeResult, access_token: str) -> str:
        """
        Fetches the user's profile and returns its email field.

        Args:
            auth_result: The decoded token endpoint response. Unused by this provider.
            access_token: The OAuth2 access token, sent as the `access_token` query parameter.

        Returns:
            str: The user's email address.

        Raises:
            RequestBuildError: If the profile URL cannot be turned into a request.
            TransportError: On network failure or a non-success status.
            ParseError: If the profile body is not a JSON object.
            FieldMissingError: If the profile has no `email` string.
        """
        with tracer.start_as_current_span("myusa.get_email_address") as span:
            try:
                request = self._build_profile_request(access_token)
            except RequestBuildError as e:
                logger.warning(f"failed building request: {e}")
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise

            try:
                profile = api_request(self.client, request)
                email = read_string_field(profile, "email")
            except ProviderError as e:
                logger.warning(f"failed making request: {e}")
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise

            span.set_status(Status(StatusCode.OK))
            return email
