# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.auth_service import AuthService
from .services.password_hashing import WerkzeugPasswordHasher
from .services.tokens import SignedTokenService, SigningKey
from .validation import PydanticCredentialsValidator

__all__ = [
    "AuthService",
    "PydanticCredentialsValidator",
    "SignedTokenService",
    "SigningKey",
    "WerkzeugPasswordHasher",
]
