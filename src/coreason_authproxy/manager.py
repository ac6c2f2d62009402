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
IdentityManager component for wiring configuration validation to the identity provider.
"""

from typing import Any

import httpx

from coreason_authproxy.config import RawConfiguration
from coreason_authproxy.providers import AuthExchangeResult, ProviderIdentity, new_provider
from coreason_authproxy.validator import ensure_valid
from coreason_authproxy.utils.logger import logger


class IdentityManager:
    """
    Process-lifetime holder of the validated configuration and the single provider.
    Releases the provider's resources via context manager.
    """

    def __init__(self, raw: RawConfiguration, client: httpx.Client | None = None) -> None:
        """
        Initialize the IdentityManager.

        Args:
            raw: The raw configuration. Validated once, here.
            client: External HTTP client (optional), handed to providers that make requests.
                If not provided, such a provider creates its own, closed together with the manager.
                An external client is never closed here.

        Raises:
            InvalidConfigurationError: If the configuration has any violation.
        """
        self.config = ensure_valid(raw)
        self.provider: ProviderIdentity = new_provider(self.config, client)
        logger.info(f"Identity provider ready (provider={self.provider.name}, upstreams={len(self.config.upstreams)})")

    def __enter__(self) -> "IdentityManager":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Releases resources the provider created for itself."""
        self.provider.close()

    def get_email_address(self, auth_result: AuthExchangeResult, access_token: str) -> str:
        """
        Resolves the authenticated user's email through the configured provider.

        Raises:
            ProviderError: If the email cannot be resolved; treat the attempt as not authenticated.
        """
        return self.provider.get_email_address(auth_result, access_token)
