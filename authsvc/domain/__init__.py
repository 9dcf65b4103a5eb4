# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for the authentication service."""

from .users.entities import HashParams, SessionToken, UserRecord
from .users.exceptions import (
    InvalidCredentialsError,
    TokenExpiredError,
    TokenInvalidError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "HashParams",
    "SessionToken",
    "UserRecord",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "TokenInvalidError",
    "UnauthorizedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
