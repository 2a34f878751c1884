#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from smithy_core.exceptions import SmithyIdentityError


class TokenIssuerError(SmithyIdentityError):
    """Raised by a token issuer when session credentials could not be obtained.

    This covers network failures, denied requests and malformed responses alike.
    """


class RoleNotConfiguredError(SmithyIdentityError):
    """Raised when credentials are requested but no role ARN was configured.

    Credential chains treat this like any other identity error and move on to the
    next source.
    """
