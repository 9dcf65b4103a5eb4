# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.domain.users.entities import UserRecord
from authsvc.domain.users.repositories import (
    CredentialStore,
    CredentialsValidator,
    PasswordHasher,
)
from authsvc.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        password_hasher: PasswordHasher,
        validator: CredentialsValidator,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._validator = validator

    def execute(self, identifier: str, password: str) -> UserRecord:
        identifier, password = self._validator.validate_registration(identifier, password)
        # hashing is slow; keep it outside the store's uniqueness check
        hashed, params = self._password_hasher.hash(password)
        user = self._users.create(identifier, hashed, params)
        logger.info(f"users.register: created user_id={user.id}")
        return user
