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
Configuration validator: turns a RawConfiguration into a ValidatedConfiguration.
"""

import re
from urllib.parse import urlsplit

from coreason_authproxy.config import RawConfiguration
from coreason_authproxy.exceptions import InvalidConfigurationError
from coreason_authproxy.models import ConfigError, ConfigErrorKind, ParsedURL, ValidatedConfiguration
from coreason_authproxy.utils.logger import logger

_CONTROL_CHARACTER = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# (tag used in messages, RawConfiguration field)
_ENDPOINT_SETTINGS = (
    ("redirect", "redirect_url"),
    ("login", "login_url"),
    ("redeem", "redeem_url"),
    ("profile", "profile_url"),
)


def parse_url(value: str) -> ParsedURL:
    """
    Parses a URL string into a ParsedURL.

    Args:
        value: The raw URL string.

    Returns:
        ParsedURL: The parsed URL. The path is returned as given (possibly empty).

    Raises:
        ValueError: If the string is not a syntactically valid URL.
    """
    if _CONTROL_CHARACTER.search(value):
        raise ValueError("invalid control character in URL")
    if value.startswith(":"):
        raise ValueError("missing protocol scheme")

    escape = _BAD_ESCAPE.search(value)
    if escape:
        raise ValueError(f"invalid URL escape {value[escape.start() : escape.start() + 3]!r}")

    # urlsplit raises ValueError for malformed IPv6 hosts
    parts = urlsplit(value)
    # .port raises ValueError for non-numeric or out-of-range ports
    _ = parts.port

    return ParsedURL(
        scheme=parts.scheme,
        netloc=parts.netloc,
        path=parts.path,
        query=parts.query,
        fragment=parts.fragment,
    )


def _missing(setting: str) -> ConfigError:
    return ConfigError(
        kind=ConfigErrorKind.MISSING_SETTING,
        setting=setting,
        message=f"missing setting: {setting}",
    )


def _url_error(setting: str, value: str, error: ValueError) -> ConfigError:
    return ConfigError(
        kind=ConfigErrorKind.URL_PARSE_FAILURE,
        setting=setting,
        value=value,
        message=f'error parsing {setting}="{value}" {error}',
    )


def validate(raw: RawConfiguration) -> tuple[ValidatedConfiguration, list[ConfigError]]:
    """
    Validates the raw configuration in a single pass.

    Every violation is collected before returning; nothing is raised for bad input
    and `raw` is left untouched.

    Args:
        raw: The raw configuration.

    Returns:
        tuple[ValidatedConfiguration, list[ConfigError]]: The validated configuration and
        the (possibly empty) list of violations. A non-empty list means the configuration
        must not be used to serve traffic.
    """
    errors: list[ConfigError] = []

    if not raw.upstreams:
        errors.append(_missing("upstream"))
    if not raw.cookie_secret.get_secret_value():
        errors.append(_missing("cookie-secret"))
    if not raw.client_id:
        errors.append(_missing("client-id"))
    if not raw.client_secret.get_secret_value():
        errors.append(_missing("client-secret"))

    endpoints: dict[str, ParsedURL] = {}
    for tag, field in _ENDPOINT_SETTINGS:
        value = getattr(raw, field)
        if not value:
            continue
        try:
            endpoints[field] = parse_url(value)
        except ValueError as e:
            errors.append(_url_error(f"{tag}-url", value, e))

    upstreams: list[ParsedURL] = []
    for value in raw.upstreams:
        try:
            upstream = parse_url(value)
        except ValueError as e:
            errors.append(_url_error("upstream", value, e))
            continue
        if not upstream.path:
            upstream = upstream.model_copy(update={"path": "/"})
        upstreams.append(upstream)

    patterns: list[re.Pattern[str]] = []
    for pattern in raw.skip_auth_regex:
        try:
            patterns.append(re.compile(pattern))
        except re.error as e:
            errors.append(
                ConfigError(
                    kind=ConfigErrorKind.REGEX_COMPILE_FAILURE,
                    setting="skip-auth-regex",
                    value=pattern,
                    message=f'error compiling regex="{pattern}" {e}',
                )
            )

    validated = ValidatedConfiguration(
        upstreams=tuple(upstreams),
        skip_auth_regex=tuple(patterns),
        http_address=raw.http_address,
        client_id=raw.client_id,
        client_secret=raw.client_secret,
        pass_basic_auth=raw.pass_basic_auth,
        htpasswd_file=raw.htpasswd_file,
        display_htpasswd_form=raw.display_htpasswd_form,
        cookie_secret=raw.cookie_secret,
        cookie_domain=raw.cookie_domain,
        cookie_expire=raw.cookie_expire,
        cookie_https_only=raw.cookie_https_only,
        cookie_httponly=raw.cookie_httponly,
        authenticated_emails_file=raw.authenticated_emails_file,
        google_apps_domains=tuple(raw.google_apps_domains),
        scope=raw.oauth_scope,
        provider=raw.provider,
        **endpoints,
    )

    logger.debug(
        f"Validated configuration: {len(upstreams)} upstream(s), "
        f"{len(patterns)} skip-auth pattern(s), {len(errors)} error(s)"
    )
    return validated, errors


def format_errors(errors: list[ConfigError]) -> str:
    """
    Joins configuration errors into the multi-line startup report.
    """
    return "Invalid configuration:\n  " + "\n  ".join(error.message for error in errors)


def ensure_valid(raw: RawConfiguration) -> ValidatedConfiguration:
    """
    Validates the raw configuration and refuses to continue on any violation.

    Args:
        raw: The raw configuration.

    Returns:
        ValidatedConfiguration: The validated configuration.

    Raises:
        InvalidConfigurationError: If at least one violation was found. The message names every one.
    """
    validated, errors = validate(raw)
    if errors:
        report = format_errors(errors)
        logger.error(report)
        raise InvalidConfigurationError(report, errors)
    return validated
