# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from threading import Lock

from authsvc.domain.users.entities import HashParams, UserRecord
from authsvc.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from authsvc.domain.users.repositories import CredentialStore


class InMemoryCredentialStore(CredentialStore):
    """Process-local store; check-then-insert runs under one lock."""

    def __init__(self) -> None:
        self._by_identifier: dict[str, UserRecord] = {}
        self._by_id: dict[str, UserRecord] = {}
        self._lock = Lock()

    def create(
        self, identifier: str, password_hash: str, hash_params: HashParams
    ) -> UserRecord:
        with self._lock:
            if identifier in self._by_identifier:
                raise UserAlreadyExistsError()
            record = UserRecord(
                id=uuid.uuid4().hex,
                identifier=identifier,
                password_hash=password_hash,
                hash_params=hash_params,
                created_at=datetime.now(UTC),
            )
            self._by_identifier[identifier] = record
            self._by_id[record.id] = record
            return record

    def find_by_identifier(self, identifier: str) -> UserRecord:
        with self._lock:
            record = self._by_identifier.get(identifier)
        if record is None:
            raise UserNotFoundError()
        return record

    def find_by_id(self, user_id: str) -> UserRecord:
        with self._lock:
            record = self._by_id.get(user_id)
        if record is None:
            raise UserNotFoundError()
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
