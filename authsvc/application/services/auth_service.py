# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.application.use_cases.users.authenticate_token import AuthenticateTokenUseCase
from authsvc.application.use_cases.users.get_profile import GetProfileUseCase
from authsvc.application.use_cases.users.login_user import LoginUserUseCase
from authsvc.application.use_cases.users.register_user import RegisterUserUseCase
from authsvc.domain.users.entities import SessionToken, UserRecord


class AuthService:
    """Single entry point over the credential use cases.

    Callers see three outcomes besides success: ``ValidationError`` (400),
    ``UserAlreadyExistsError`` (409) and ``UnauthorizedError`` (401).
    Anything else is an internal failure.
    """

    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        authenticate_use_case: AuthenticateTokenUseCase,
        profile_use_case: GetProfileUseCase,
    ) -> None:
        self._register = register_use_case
        self._login = login_use_case
        self._authenticate = authenticate_use_case
        self._profile = profile_use_case

    def register(self, identifier: str, password: str) -> UserRecord:
        return self._register.execute(identifier, password)

    def login(self, identifier: str, password: str) -> SessionToken:
        return self._login.execute(identifier, password)

    def authenticate(self, token: str | None) -> str:
        return self._authenticate.execute(token)

    def profile(self, subject_id: str) -> UserRecord:
        return self._profile.execute(subject_id)
