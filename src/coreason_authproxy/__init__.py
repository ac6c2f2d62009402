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
Configuration validation and identity-provider abstraction for an authenticating reverse proxy.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .config import RawConfiguration
from .exceptions import AuthProxyError, InvalidConfigurationError, ProviderError
from .manager import IdentityManager
from .models import ConfigError, ValidatedConfiguration
from .providers import GoogleProviderIdentity, MyUsaProviderIdentity, ProviderIdentity, new_provider
from .validator import ensure_valid, validate

__all__ = [
    "AuthProxyError",
    "ConfigError",
    "GoogleProviderIdentity",
    "IdentityManager",
    "InvalidConfigurationError",
    "MyUsaProviderIdentity",
    "ProviderError",
    "ProviderIdentity",
    "RawConfiguration",
    "ValidatedConfiguration",
    "ensure_valid",
    "new_provider",
    "validate",
]
