# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from authsvc.application.validation import normalize_identifier
from authsvc.domain.users.entities import HashParams, SessionToken, UserRecord
from authsvc.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from authsvc.domain.users.repositories import CredentialStore, PasswordHasher, TokenService


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        # Unknown identifiers are checked against this so both failure paths cost one hash.
        self._dummy_hash: tuple[str, HashParams] = password_hasher.hash(
            secrets.token_urlsafe(16)
        )

    def execute(self, identifier: str, password: str) -> SessionToken:
        user = self._lookup(identifier)

        if user is None:
            hashed, params = self._dummy_hash
            self._password_hasher.verify(password, hashed, params)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash, user.hash_params):
            raise InvalidCredentialsError()

        return self._tokens.issue(user.id)

    def _lookup(self, identifier: object) -> UserRecord | None:
        if not isinstance(identifier, str):
            return None
        try:
            return self._users.find_by_identifier(normalize_identifier(identifier))
        except UserNotFoundError:
            return None
