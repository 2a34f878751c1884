#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def token_issuer() -> AsyncMock:
    return AsyncMock()
