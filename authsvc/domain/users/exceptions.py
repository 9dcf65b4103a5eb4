# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authsvc.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT


class UserNotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class InvalidCredentialsError(UnauthorizedError):
    pass


class TokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED


class TokenInvalidError(TokenError):
    code = "invalid_token"


class TokenExpiredError(TokenError):
    code = "token_expired"
