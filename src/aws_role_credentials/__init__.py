#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Temporary AWS credentials obtained by assuming an IAM role, cached and renewed
shortly before they expire."""

import importlib.metadata

from .cache import RoleSessionCache
from .chain import FallbackCredentialsResolver, create_default_chain
from .config import ROLE_ARN_CONFIG_KEY, ROLE_ARN_ENV_VAR, RoleSessionConfig
from .exceptions import RoleNotConfiguredError, TokenIssuerError
from .resolver import AssumeRoleCredentialsResolver
from .types import AssumeRoleRequest, SessionCredentials

__version__: str = importlib.metadata.version("aws-role-credentials")

__all__ = (
    "ROLE_ARN_CONFIG_KEY",
    "ROLE_ARN_ENV_VAR",
    "AssumeRoleCredentialsResolver",
    "AssumeRoleRequest",
    "FallbackCredentialsResolver",
    "RoleNotConfiguredError",
    "RoleSessionCache",
    "RoleSessionConfig",
    "SessionCredentials",
    "TokenIssuerError",
    "create_default_chain",
)
