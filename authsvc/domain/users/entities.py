# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class HashParams:
    """Algorithm parameters needed to re-derive a password hash.

    ``method`` carries the cost settings, e.g. ``scrypt:32768:8:1``.
    """

    method: str
    salt: str


@dataclass(slots=True, frozen=True)
class UserRecord:

    id: str
    identifier: str
    password_hash: str = field(repr=False)
    hash_params: HashParams = field(repr=False)
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:

    subject_id: str
    issued_at: datetime
    expires_at: datetime
    signature: str
    value: str = field(repr=False)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
