#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import asyncio
import logging
from typing import Final

from smithy_core.utils import ensure_utc

from .config import RoleSessionConfig
from .exceptions import TokenIssuerError
from .interfaces import Clock, TokenIssuer
from .types import AssumeRoleRequest, SessionCredentials
from .utils import SystemClock, create_session_name

_LOGGER: Final = logging.getLogger(__name__)


class RoleSessionCache:
    """Holds the session credentials for an assumed role and renews them on demand.

    Credentials are requested from the token issuer the first time they are needed
    and again whenever the cached ones are within the renewal threshold of their
    expiration. There is no background timer; renewal happens when credentials are
    asked for or when :py:meth:`force_refresh` is called.

    A failed renewal never replaces what is cached. Callers keep receiving the last
    credentials that were issued, even past their expiration, until a renewal
    succeeds.
    """

    def __init__(
        self,
        role_arn: str | None,
        *,
        token_issuer: TokenIssuer,
        clock: Clock | None = None,
        config: RoleSessionConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Construct a RoleSessionCache.

        :param role_arn: The ARN of the role to assume. If ``None``, the cache never
            provides credentials and never contacts the token issuer.
        :param token_issuer: The service that issues session credentials.
        :param clock: The source of the current time. Defaults to the system clock.
        :param config: Renewal threshold, session duration and session name prefix.
        :param logger: Where to log. Defaults to this module's logger.
        """
        self._role_arn = role_arn
        self._token_issuer = token_issuer
        self._clock = clock or SystemClock()
        self._config = config or RoleSessionConfig()
        self._logger = logger or _LOGGER
        self._refresh_lock = asyncio.Lock()
        self._session: SessionCredentials | None = None

    @property
    def role_arn(self) -> str | None:
        return self._role_arn

    async def current_credentials(self) -> SessionCredentials | None:
        """Get the current session credentials, renewing them first if they are stale.

        :returns: The cached credentials, or ``None`` if no role is configured or no
            credentials have ever been issued.
        """
        if self._role_arn is None:
            self._logger.debug("No role ARN configured, not providing credentials.")
            return None

        if self.needs_new_session():
            async with self._refresh_lock:
                # Another caller may have renewed while this one waited.
                if self.needs_new_session():
                    await self._start_session(self._role_arn)
        return self._session

    async def force_refresh(self) -> None:
        """Request new session credentials regardless of the cached ones."""
        if self._role_arn is None:
            self._logger.debug("No role ARN configured, nothing to refresh.")
            return

        self._logger.debug("Forcing a new session for role %s.", self._role_arn)
        async with self._refresh_lock:
            await self._start_session(self._role_arn)

    def needs_new_session(self) -> bool:
        """Whether the cached credentials are missing or due for renewal."""
        session = self._session
        if session is None:
            self._logger.debug("No session credentials yet. Needs new session.")
            return True

        now = ensure_utc(self._clock.now())
        if now >= session.expiration - self._config.renewal_threshold:
            self._logger.debug(
                "Session credentials expire at %s. Needs new session.",
                session.expiration.isoformat(),
            )
            return True

        return False

    async def _start_session(self, role_arn: str) -> None:
        request = AssumeRoleRequest(
            role_arn=role_arn,
            role_session_name=create_session_name(
                self._config.session_name_prefix, ensure_utc(self._clock.now())
            ),
            duration_seconds=self._config.duration_seconds,
        )
        self._logger.debug(
            "Assuming role %s with session name %s.",
            request.role_arn,
            request.role_session_name,
        )
        try:
            session = await self._token_issuer.assume_role(request)
            if not isinstance(session, SessionCredentials):
                raise TokenIssuerError(
                    f"Expected SessionCredentials from the token issuer, got "
                    f"{type(session).__name__}."
                )
        except Exception:
            self._logger.warning(
                "Unable to start a new session for role %s. Continuing with the "
                "previous session credentials, if any.",
                role_arn,
                exc_info=True,
            )
            return

        self._session = session
        self._logger.debug(
            "Started session %s, expires at %s.",
            request.role_session_name,
            session.expiration.isoformat(),
        )
