# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless, signed session tokens.

A token is the itsdangerous URL-safe serialization of ``{sub, iat, exp}``
followed by an HMAC-SHA256 signature derived from the process signing key.
Nothing is stored server side; a token stays valid until ``exp`` and
there is no revocation list.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from itsdangerous import BadData, URLSafeSerializer
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from authsvc.domain.users.entities import SessionToken
from authsvc.domain.users.exceptions import TokenExpiredError, TokenInvalidError
from authsvc.domain.users.repositories import TokenService
from authsvc.shared.logging import logger

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class SigningKey:
    """Read-only key material, built once at startup and passed explicitly."""

    secret: bytes = field(repr=False)
    salt: str = "authsvc.session"

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("signing key secret must not be empty")

    @classmethod
    def from_secret(cls, secret: str, *, salt: str = "authsvc.session") -> SigningKey:
        return cls(secret=secret.encode("utf-8"), salt=salt)


class _TokenPayload(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    sub: str = Field(min_length=1)
    iat: int = Field(ge=0)
    exp: int = Field(ge=0)


class SignedTokenService(TokenService):
    def __init__(
        self,
        *,
        signing_key: SigningKey,
        ttl: timedelta,
        clock: Clock = utcnow,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._serializer = URLSafeSerializer(
            signing_key.secret,
            salt=signing_key.salt,
            signer_kwargs={"digest_method": hashlib.sha256},
        )
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject_id: str) -> SessionToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        payload = _TokenPayload(
            sub=subject_id,
            iat=int(issued_at.timestamp()),
            exp=int(expires_at.timestamp()),
        )
        value = self._serializer.dumps(payload.model_dump())
        signature = value.rsplit(".", 1)[-1]
        logger.debug(f"tokens.issue: sub={subject_id} exp={expires_at.isoformat()}")
        return SessionToken(
            subject_id=subject_id,
            issued_at=issued_at,
            expires_at=expires_at,
            signature=signature,
            value=value,
        )

    def decode(self, token: str) -> SessionToken:
        """Check the signature and payload shape; does not look at expiry."""
        if not isinstance(token, str) or not token:
            raise TokenInvalidError()
        try:
            raw = self._serializer.loads(token)
            payload = _TokenPayload.model_validate(raw)
        except BadData as exc:
            raise TokenInvalidError() from exc
        except PydanticValidationError as exc:
            raise TokenInvalidError() from exc

        if payload.exp <= payload.iat:
            raise TokenInvalidError()
        try:
            issued_at = datetime.fromtimestamp(payload.iat, UTC)
            expires_at = datetime.fromtimestamp(payload.exp, UTC)
        except (OverflowError, OSError, ValueError) as exc:
            raise TokenInvalidError() from exc

        return SessionToken(
            subject_id=payload.sub,
            issued_at=issued_at,
            expires_at=expires_at,
            signature=token.rsplit(".", 1)[-1],
            value=token,
        )

    def verify(self, token: str) -> str:
        session = self.decode(token)
        if session.is_expired(self._clock()):
            raise TokenExpiredError()
        return session.subject_id
