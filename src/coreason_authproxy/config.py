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
Raw configuration for the coreason-authproxy package.
"""

from datetime import timedelta

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RawConfiguration(BaseSettings):
    """
    Every user-supplied proxy setting, exactly as given.

    No parsing or cross-field checks happen here; see `coreason_authproxy.validator.validate`.
    Absent settings are represented by empty strings and empty lists.

    Attributes:
        upstreams (list[str]): Targets the proxy forwards to. Order is the routing priority.
        skip_auth_regex (list[str]): Request path patterns exempted from authentication.
        login_url (str): Override for the provider's authorization endpoint.
        redeem_url (str): Override for the provider's token endpoint.
        profile_url (str): Override for the provider's profile endpoint.
        oauth_scope (str): OAuth2 scope override.
        provider (str): Provider discriminator. "myusa" selects MyUSA, anything else Google.
    """

    model_config = SettingsConfigDict(
        env_prefix="COREASON_PROXY_",
        case_sensitive=False,
        frozen=True,
    )

    http_address: str = "127.0.0.1:4180"
    redirect_url: str = ""
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    pass_basic_auth: bool = True
    htpasswd_file: str = ""
    display_htpasswd_form: bool = True
    cookie_secret: SecretStr = SecretStr("")
    cookie_domain: str = ""
    cookie_expire: timedelta = timedelta(hours=168)
    cookie_https_only: bool = True
    cookie_httponly: bool = True
    authenticated_emails_file: str = ""
    google_apps_domains: list[str] = Field(default_factory=list)
    upstreams: list[str] = Field(default_factory=list)
    skip_auth_regex: list[str] = Field(default_factory=list)
    login_url: str = ""
    redeem_url: str = ""
    profile_url: str = ""
    oauth_scope: str = ""
    provider: str = ""
