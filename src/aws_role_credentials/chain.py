#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Mapping, Sequence
from typing import Final

from smithy_aws_core.identity import (
    AWSCredentialsIdentity,
    AWSCredentialsResolver,
    AWSIdentityProperties,
    EnvironmentCredentialsResolver,
    StaticCredentialsResolver,
)
from smithy_core.aio.interfaces.identity import IdentityResolver
from smithy_core.exceptions import SmithyIdentityError

from .config import RoleSessionConfig
from .interfaces import Clock, TokenIssuer
from .resolver import AssumeRoleCredentialsResolver

logger: Final = logging.getLogger(__name__)


class FallbackCredentialsResolver(
    IdentityResolver[AWSCredentialsIdentity, AWSIdentityProperties]
):
    """Attempts to resolve credentials from each of a sequence of resolvers in turn.

    If a resolver raises a :py:class:`SmithyIdentityError`, the next one is tried.
    Nothing is cached here, so resolvers that renew their credentials ahead of
    expiration are asked every time.
    """

    def __init__(
        self,
        resolvers: Sequence[
            IdentityResolver[AWSCredentialsIdentity, AWSIdentityProperties]
        ],
    ) -> None:
        """Construct a FallbackCredentialsResolver.

        :param resolvers: The resolvers to try, in order.
        """
        self._resolvers = resolvers

    async def get_identity(
        self, *, properties: AWSIdentityProperties
    ) -> AWSCredentialsIdentity:
        for resolver in self._resolvers:
            try:
                logger.debug(
                    "Attempting to resolve credentials from %s.", type(resolver)
                )
                return await resolver.get_identity(properties=properties)
            except SmithyIdentityError as e:
                logger.debug(
                    "Failed to resolve credentials from %s: %s", type(resolver), e
                )

        raise SmithyIdentityError("Failed to resolve credentials from any source.")


def create_default_chain(
    configuration: Mapping[str, str | None],
    *,
    token_issuer: TokenIssuer,
    environ: Mapping[str, str] | None = None,
    clock: Clock | None = None,
    session_config: RoleSessionConfig | None = None,
) -> AWSCredentialsResolver:
    """Creates a credentials chain that assumes the configured role if there is one.

    When no role ARN is configured, credentials come from the static properties
    passed to the resolver or from the standard AWS environment variables.
    """
    return FallbackCredentialsResolver(
        resolvers=(
            AssumeRoleCredentialsResolver.from_config(
                configuration,
                token_issuer=token_issuer,
                environ=environ,
                clock=clock,
                session_config=session_config,
            ),
            StaticCredentialsResolver(),
            EnvironmentCredentialsResolver(),
        )
    )
