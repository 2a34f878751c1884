#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Final

logger: Final = logging.getLogger(__name__)

ROLE_ARN_CONFIG_KEY: Final = "amz-assume-role-arn"
"""Host configuration key holding the ARN of the role to assume."""

ROLE_ARN_ENV_VAR: Final = "AWS_ROLE_ARN_KEY"
"""Environment variable consulted when the host configuration has no role ARN."""

_DEFAULT_RENEWAL_THRESHOLD = timedelta(seconds=60)
_DEFAULT_SESSION_DURATION = timedelta(seconds=3600)
_DEFAULT_SESSION_NAME_PREFIX = "custom-credential-provider"


@dataclass(frozen=True, kw_only=True)
class RoleSessionConfig:
    """Configuration for assumed role sessions."""

    renewal_threshold: timedelta = _DEFAULT_RENEWAL_THRESHOLD
    """How long before expiration cached credentials are considered stale."""

    session_duration: timedelta = _DEFAULT_SESSION_DURATION
    """The lifetime requested for each new session."""

    session_name_prefix: str = _DEFAULT_SESSION_NAME_PREFIX
    """Fixed part of every role session name; the request time is appended."""

    def __post_init__(self) -> None:
        if self.session_duration <= timedelta(0):
            raise ValueError("Session duration must be positive.")
        if self.renewal_threshold < timedelta(0):
            raise ValueError("Renewal threshold must not be negative.")
        if self.renewal_threshold >= self.session_duration:
            raise ValueError(
                "Renewal threshold must be shorter than the session duration."
            )

    @property
    def duration_seconds(self) -> int:
        return int(self.session_duration.total_seconds())


def resolve_role_arn(
    configuration: Mapping[str, str | None],
    *,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Find the ARN of the role to assume.

    The host configuration is checked first, then the environment. Empty values are
    treated as missing.

    :param configuration: Host configuration entries.
    :param environ: Environment variables. Defaults to :py:data:`os.environ`.
    :returns: The role ARN, or ``None`` if neither source provides one.
    """
    role_arn = configuration.get(ROLE_ARN_CONFIG_KEY)
    if role_arn:
        logger.info("Using role ARN %s from configuration.", role_arn)
        return role_arn

    logger.debug(
        "No role ARN under %s in configuration, checking environment variable %s.",
        ROLE_ARN_CONFIG_KEY,
        ROLE_ARN_ENV_VAR,
    )
    if environ is None:
        environ = os.environ
    role_arn = environ.get(ROLE_ARN_ENV_VAR)
    if role_arn:
        logger.info("Using role ARN %s from environment.", role_arn)
        return role_arn

    logger.info(
        "Environment variable %s not set. Not assuming a role.", ROLE_ARN_ENV_VAR
    )
    return None
