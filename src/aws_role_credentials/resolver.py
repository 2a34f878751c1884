#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import Self

from smithy_aws_core.identity import AWSCredentialsIdentity, AWSIdentityProperties
from smithy_core.aio.interfaces.identity import IdentityResolver

from .cache import RoleSessionCache
from .config import RoleSessionConfig, resolve_role_arn
from .exceptions import RoleNotConfiguredError, TokenIssuerError
from .interfaces import Clock, TokenIssuer


class AssumeRoleCredentialsResolver(
    IdentityResolver[AWSCredentialsIdentity, AWSIdentityProperties]
):
    """Resolves AWS Credentials by assuming an IAM role."""

    def __init__(self, cache: RoleSessionCache) -> None:
        self._cache = cache

    @classmethod
    def from_config(
        cls,
        configuration: Mapping[str, str | None],
        *,
        token_issuer: TokenIssuer,
        environ: Mapping[str, str] | None = None,
        clock: Clock | None = None,
        session_config: RoleSessionConfig | None = None,
    ) -> Self:
        """Create a resolver for the role named in host configuration.

        The role ARN is looked up once, here, and never re-read.

        :param configuration: Host configuration entries.
        :param token_issuer: The service that issues session credentials.
        :param environ: Environment variables consulted when the configuration has
            no role ARN. Defaults to :py:data:`os.environ`.
        :param clock: The source of the current time.
        :param session_config: Renewal and session settings.
        """
        role_arn = resolve_role_arn(configuration, environ=environ)
        return cls(
            RoleSessionCache(
                role_arn,
                token_issuer=token_issuer,
                clock=clock,
                config=session_config,
            )
        )

    @property
    def role_arn(self) -> str | None:
        return self._cache.role_arn

    async def get_identity(
        self, *, properties: AWSIdentityProperties
    ) -> AWSCredentialsIdentity:
        credentials = await self._cache.current_credentials()
        if credentials is None:
            if self._cache.role_arn is None:
                raise RoleNotConfiguredError(
                    "Attempted to resolve AWS credentials by assuming a role, but no "
                    "role ARN was configured."
                )
            raise TokenIssuerError(
                f"Unable to obtain session credentials for role {self._cache.role_arn}."
            )
        return credentials.as_identity()

    async def refresh(self) -> None:
        """Request new session credentials even if the cached ones are still valid."""
        await self._cache.force_refresh()
