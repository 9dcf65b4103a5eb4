# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import HashParams, SessionToken, UserRecord


class CredentialStore(Protocol):
    def create(
        self, identifier: str, password_hash: str, hash_params: HashParams
    ) -> UserRecord: ...
    def find_by_identifier(self, identifier: str) -> UserRecord: ...
    def find_by_id(self, user_id: str) -> UserRecord: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> tuple[str, HashParams]: ...
    def verify(self, password: str, hashed: str, params: HashParams) -> bool: ...


class TokenService(Protocol):
    def issue(self, subject_id: str) -> SessionToken: ...
    def verify(self, token: str) -> str: ...


class CredentialsValidator(Protocol):
    def validate_registration(self, identifier: str, password: str) -> tuple[str, str]: ...
