#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime

# STS rejects role session names longer than this.
MAX_SESSION_NAME_LENGTH = 64


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


def epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch for a timezone-aware datetime."""
    return int(value.timestamp() * 1000)


def create_session_name(prefix: str, now: datetime) -> str:
    """Build a role session name from a prefix and the current time.

    The timestamp suffix keeps the name distinct per session so that it is useful in
    audit trails. The prefix is shortened if needed so the suffix always fits.

    :param prefix: The fixed part of the name.
    :param now: The time the session is requested.
    """
    suffix = str(epoch_millis(now))
    return prefix[: MAX_SESSION_NAME_LENGTH - len(suffix)] + suffix
