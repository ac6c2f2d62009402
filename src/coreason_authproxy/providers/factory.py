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
Identity provider factory.

Selects the provider strategy from the validated configuration.
"""

import httpx

from coreason_authproxy.models import ProviderData, ValidatedConfiguration
from coreason_authproxy.providers.base import ProviderIdentity
from coreason_authproxy.providers.google import GoogleProviderIdentity
from coreason_authproxy.providers.myusa import MyUsaProviderIdentity
from coreason_authproxy.utils.logger import logger

MYUSA = "myusa"


def provider_data_from_config(cfg: ValidatedConfiguration) -> ProviderData:
    """Collects the operator-supplied endpoints and scope; unset values stay unset."""
    return ProviderData(
        login_url=cfg.login_url,
        redeem_url=cfg.redeem_url,
        profile_url=cfg.profile_url,
        scope=cfg.scope,
    )


def new_provider(cfg: ValidatedConfiguration, client: httpx.Client | None = None) -> ProviderIdentity:
    """
    Build the identity provider selected by `cfg.provider`.

    - 'myusa': MyUsaProviderIdentity
    - anything else, including unset: GoogleProviderIdentity

    Args:
        cfg: The validated configuration.
        client: HTTP client for providers that call out (optional). Without one, such a
            provider creates its own; release it with `provider.close()`.

    Returns:
        ProviderIdentity: A provider holding its own ProviderData.
    """
    data = provider_data_from_config(cfg)

    if cfg.provider == MYUSA:
        logger.info("Initializing MyUSA identity provider")
        return MyUsaProviderIdentity(data, client)

    if cfg.provider:
        logger.warning(f"Unknown provider {cfg.provider!r}, falling back to Google")
    logger.info("Initializing Google identity provider")
    return GoogleProviderIdentity(data)
