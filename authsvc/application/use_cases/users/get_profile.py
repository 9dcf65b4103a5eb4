# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.domain.users.entities import UserRecord
from authsvc.domain.users.exceptions import UnauthorizedError, UserNotFoundError
from authsvc.domain.users.repositories import CredentialStore


class GetProfileUseCase:
    def __init__(self, *, users: CredentialStore) -> None:
        self._users = users

    def execute(self, subject_id: str) -> UserRecord:
        try:
            return self._users.find_by_id(subject_id)
        except UserNotFoundError:
            # token outlived its account
            raise UnauthorizedError() from None
