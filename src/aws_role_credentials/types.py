#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from datetime import datetime

from smithy_aws_core.identity import AWSCredentialsIdentity
from smithy_core.utils import ensure_utc


@dataclass(frozen=True, kw_only=True)
class AssumeRoleRequest:
    """A request to exchange a role ARN for temporary session credentials."""

    role_arn: str
    """The ARN of the role to assume."""

    role_session_name: str
    """An identifier for the assumed role session, recorded in audit trails."""

    duration_seconds: int
    """The requested lifetime of the session credentials."""


@dataclass(frozen=True, kw_only=True)
class SessionCredentials:
    """Temporary credentials issued for an assumed role session.

    Instances are never mutated. A renewal produces a new instance that replaces the
    previous one as a whole, so the keys and the expiration always belong together.
    """

    access_key_id: str
    """A unique identifier for the temporary credentials."""

    secret_access_key: str
    """The secret key paired with ``access_key_id``."""

    session_token: str
    """The token that must accompany requests signed with these credentials."""

    expiration: datetime
    """The time at which the credentials stop being accepted.

    If a time zone is provided, it is converted to UTC. Naive values are taken to be
    in UTC.
    """

    def __post_init__(self) -> None:
        object.__setattr__(self, "expiration", ensure_utc(self.expiration))

    def as_identity(self) -> AWSCredentialsIdentity:
        """Convert to the identity type consumed by smithy clients and signers."""
        return AWSCredentialsIdentity(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token,
            expiration=self.expiration,
        )

    def __repr__(self) -> str:
        return (
            f"SessionCredentials(access_key_id={self.access_key_id!r}, "
            f"expiration={self.expiration.isoformat()!r})"
        )
