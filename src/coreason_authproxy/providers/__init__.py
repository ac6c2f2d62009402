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
Identity provider strategies.
"""

from .base import AuthExchangeResult, ProviderIdentity
from .factory import new_provider
from .google import GoogleProviderIdentity
from .myusa import MyUsaProviderIdentity

__all__ = [
    "AuthExchangeResult",
    "GoogleProviderIdentity",
    "MyUsaProviderIdentity",
    "ProviderIdentity",
    "new_provider",
]
