#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from aws_role_credentials.chain import FallbackCredentialsResolver, create_default_chain
from aws_role_credentials.config import ROLE_ARN_CONFIG_KEY
from aws_role_credentials.exceptions import TokenIssuerError
from aws_role_credentials.interfaces import Clock
from aws_role_credentials.types import SessionCredentials
from smithy_aws_core.identity import AWSCredentialsIdentity, AWSIdentityProperties
from smithy_core.exceptions import SmithyIdentityError

ROLE_ARN = "arn:aws:iam::123456789012:role/data-lake-reader"
ISSUED_AT = datetime(2000, 2, 1, 23, 50, tzinfo=UTC)
EXPIRATION = ISSUED_AT + timedelta(hours=1)


def make_session(session_token: str, expiration: datetime) -> SessionCredentials:
    return SessionCredentials(
        access_key_id="keyid",
        secret_access_key="key",
        session_token=session_token,
        expiration=expiration,
    )


@pytest.fixture
def clock() -> Mock:
    clock = Mock(spec=Clock)
    clock.now.return_value = ISSUED_AT
    return clock


@pytest.fixture(autouse=True)
def clear_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)


async def test_no_resolvers():
    chain = FallbackCredentialsResolver(resolvers=[])
    with pytest.raises(SmithyIdentityError):
        await chain.get_identity(properties=AWSIdentityProperties())


async def test_first_successful_resolver_wins():
    identity = AWSCredentialsIdentity(access_key_id="akid", secret_access_key="s")
    failing = AsyncMock()
    failing.get_identity.side_effect = SmithyIdentityError("nope")
    succeeding = AsyncMock()
    succeeding.get_identity.return_value = identity
    unused = AsyncMock()

    chain = FallbackCredentialsResolver(resolvers=[failing, succeeding, unused])

    assert await chain.get_identity(properties=AWSIdentityProperties()) is identity
    unused.get_identity.assert_not_awaited()


async def test_chain_is_not_cached():
    resolver = AsyncMock()
    resolver.get_identity.side_effect = [
        AWSCredentialsIdentity(access_key_id="first", secret_access_key="s"),
        AWSCredentialsIdentity(access_key_id="second", secret_access_key="s"),
    ]
    chain = FallbackCredentialsResolver(resolvers=[resolver])

    first = await chain.get_identity(properties=AWSIdentityProperties())
    second = await chain.get_identity(properties=AWSIdentityProperties())

    assert first.access_key_id == "first"
    assert second.access_key_id == "second"


async def test_default_chain_assumes_configured_role(
    token_issuer: AsyncMock, clock: Mock
):
    token_issuer.assume_role.return_value = make_session("session1", EXPIRATION)
    chain = create_default_chain(
        {ROLE_ARN_CONFIG_KEY: ROLE_ARN},
        token_issuer=token_issuer,
        environ={},
        clock=clock,
    )

    identity = await chain.get_identity(
        properties=AWSIdentityProperties(access_key_id="static", secret_access_key="s")
    )

    assert identity.session_token == "session1"


async def test_default_chain_renews_role_credentials(
    token_issuer: AsyncMock, clock: Mock
):
    token_issuer.assume_role.side_effect = [
        make_session("session1", EXPIRATION),
        make_session("session2", EXPIRATION + timedelta(hours=1)),
    ]
    chain = create_default_chain(
        {ROLE_ARN_CONFIG_KEY: ROLE_ARN},
        token_issuer=token_issuer,
        environ={},
        clock=clock,
    )
    await chain.get_identity(properties=AWSIdentityProperties())

    clock.now.return_value = EXPIRATION - timedelta(seconds=30)
    identity = await chain.get_identity(properties=AWSIdentityProperties())

    assert identity.session_token == "session2"


async def test_default_chain_falls_back_to_static(
    token_issuer: AsyncMock, clock: Mock
):
    chain = create_default_chain(
        {}, token_issuer=token_issuer, environ={}, clock=clock
    )

    identity = await chain.get_identity(
        properties=AWSIdentityProperties(access_key_id="static", secret_access_key="s")
    )

    assert identity.access_key_id == "static"
    token_issuer.assume_role.assert_not_awaited()


async def test_default_chain_falls_back_to_environment(
    token_issuer: AsyncMock, clock: Mock, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env-akid")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env-secret")
    chain = create_default_chain(
        {}, token_issuer=token_issuer, environ={}, clock=clock
    )

    identity = await chain.get_identity(properties=AWSIdentityProperties())

    assert identity.access_key_id == "env-akid"
    assert identity.secret_access_key == "env-secret"


async def test_default_chain_falls_back_when_role_never_issued(
    token_issuer: AsyncMock, clock: Mock
):
    token_issuer.assume_role.side_effect = TokenIssuerError("Access denied")
    chain = create_default_chain(
        {ROLE_ARN_CONFIG_KEY: ROLE_ARN},
        token_issuer=token_issuer,
        environ={},
        clock=clock,
    )

    identity = await chain.get_identity(
        properties=AWSIdentityProperties(access_key_id="static", secret_access_key="s")
    )

    assert identity.access_key_id == "static"


async def test_default_chain_nothing_configured(
    token_issuer: AsyncMock, clock: Mock
):
    chain = create_default_chain(
        {}, token_issuer=token_issuer, environ={}, clock=clock
    )
    with pytest.raises(SmithyIdentityError):
        await chain.get_identity(properties=AWSIdentityProperties())
