#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import datetime
from typing import Protocol, runtime_checkable

from .types import AssumeRoleRequest, SessionCredentials


@runtime_checkable
class Clock(Protocol):
    """A source of the current time."""

    def now(self) -> datetime:
        """Return the current time as a UTC timezone-aware datetime."""
        ...


class TokenIssuer(Protocol):
    """Exchanges a role ARN for temporary session credentials, such as STS."""

    async def assume_role(self, request: AssumeRoleRequest) -> SessionCredentials:
        """Assume the requested role.

        Implementations own their retries and timeouts. Failures should be raised
        as :py:class:`aws_role_credentials.exceptions.TokenIssuerError`.

        :param request: The role, session name and duration to request.
        """
        ...
