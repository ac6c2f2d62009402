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
Data models for the coreason-authproxy package.
"""

import re
from datetime import timedelta
from enum import StrEnum
from urllib.parse import urlunsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ParsedURL(BaseModel):
    """
    A syntactically valid URL, split into its components.

    This model is frozen (immutable); use `model_copy(update=...)` to derive a variant.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    scheme: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))


class ConfigErrorKind(StrEnum):
    MISSING_SETTING = "missing-setting"
    URL_PARSE_FAILURE = "url-parse-failure"
    REGEX_COMPILE_FAILURE = "regex-compile-failure"


class ConfigError(BaseModel):
    """
    A single configuration violation.

    Attributes:
        kind (ConfigErrorKind): The category of violation.
        setting (str): The setting the violation belongs to (e.g. "upstream", "redirect-url").
        value (str | None): The offending input, when there is one.
        message (str): Human-readable description, used in the startup report.
    """

    model_config = ConfigDict(frozen=True)

    kind: ConfigErrorKind
    setting: str
    value: str | None = None
    message: str

    def __str__(self) -> str:
        return self.message


class ValidatedConfiguration(BaseModel):
    """
    The typed, pre-parsed configuration produced by `coreason_authproxy.validator.validate`.

    Every present URL is syntactically valid, every upstream has a non-empty path
    and every skip-auth pattern is compiled. Patterns that failed to compile are
    absent, so positions do not line up with the raw pattern list.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    redirect_url: ParsedURL | None = None
    login_url: ParsedURL | None = None
    redeem_url: ParsedURL | None = None
    profile_url: ParsedURL | None = None
    upstreams: tuple[ParsedURL, ...] = ()
    skip_auth_regex: tuple[re.Pattern[str], ...] = ()

    http_address: str = ""
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    pass_basic_auth: bool = False
    htpasswd_file: str = ""
    display_htpasswd_form: bool = False
    cookie_secret: SecretStr = SecretStr("")
    cookie_domain: str = ""
    cookie_expire: timedelta = timedelta(0)
    cookie_https_only: bool = False
    cookie_httponly: bool = False
    authenticated_emails_file: str = ""
    google_apps_domains: tuple[str, ...] = ()
    scope: str = ""
    provider: str = ""


class ProviderData(BaseModel):
    """
    Endpoints and scope of one identity provider instance.

    Attributes:
        login_url (ParsedURL | None): Where the browser is sent to authorize.
        redeem_url (ParsedURL | None): Where the authorization code is exchanged.
        profile_url (ParsedURL | None): Profile endpoint, for providers that need one.
        scope (str): The OAuth2 scope string requested during authorization.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    login_url: ParsedURL | None = Field(default=None, description="The authorization endpoint.")
    redeem_url: ParsedURL | None = Field(default=None, description="The token endpoint.")
    profile_url: ParsedURL | None = Field(default=None, description="The profile endpoint, if any.")
    scope: str = Field(default="", description="The OAuth2 scope string.")
