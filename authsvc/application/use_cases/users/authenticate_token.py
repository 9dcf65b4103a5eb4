# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.domain.users.exceptions import TokenError, UnauthorizedError
from authsvc.domain.users.repositories import TokenService
from authsvc.shared.logging import logger


class AuthenticateTokenUseCase:
    """Resolve a presented token to its subject id.

    Expired and forged tokens both come out as :class:`UnauthorizedError`;
    the reason is only logged.
    """

    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> str:
        if not token:
            raise UnauthorizedError()
        try:
            return self._tokens.verify(token)
        except TokenError as exc:
            logger.info(f"auth.authenticate: rejected token ({exc.code})")
            raise UnauthorizedError() from None
