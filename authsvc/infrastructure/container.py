# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property
from typing import TYPE_CHECKING

from authsvc.application.services.auth_service import AuthService
from authsvc.application.services.password_hashing import WerkzeugPasswordHasher
from authsvc.application.services.tokens import SignedTokenService, SigningKey
from authsvc.application.use_cases.users.authenticate_token import AuthenticateTokenUseCase
from authsvc.application.use_cases.users.get_profile import GetProfileUseCase
from authsvc.application.use_cases.users.login_user import LoginUserUseCase
from authsvc.application.use_cases.users.register_user import RegisterUserUseCase
from authsvc.application.validation import PydanticCredentialsValidator
from authsvc.domain.users.repositories import CredentialStore
from authsvc.infrastructure.repositories.users.in_memory_credential_store import (
    InMemoryCredentialStore,
)
from authsvc.interfaces.http.controllers.auth_controller import AuthController
from authsvc.shared.config import AppConfig, load_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session, scoped_session


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def signing_key(self) -> SigningKey:
        return SigningKey.from_secret(self._config.secret_key, salt=self._config.tokens.salt)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(
            method=self._config.hashing.method,
            salt_length=self._config.hashing.salt_length,
        )

    @cached_property
    def token_service(self) -> SignedTokenService:
        return SignedTokenService(
            signing_key=self.signing_key,
            ttl=timedelta(seconds=self._config.tokens.ttl_seconds),
        )

    @cached_property
    def credentials_validator(self) -> PydanticCredentialsValidator:
        return PydanticCredentialsValidator()

    @cached_property
    def db_engine(self) -> Engine:
        from authsvc.infrastructure.db import engine_for

        return engine_for(self._config.database)

    @cached_property
    def session_factory(self) -> scoped_session[Session]:
        from authsvc.infrastructure.db import session_factory_for

        return session_factory_for(self.db_engine)

    @cached_property
    def credential_store(self) -> CredentialStore:
        if self._config.store_backend == "memory":
            return InMemoryCredentialStore()

        from authsvc.infrastructure.repositories.users.sqlalchemy_credential_store import (
            SqlAlchemyCredentialStore,
        )

        return SqlAlchemyCredentialStore(session_factory=self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.credential_store,
            password_hasher=self.password_hasher,
            validator=self.credentials_validator,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.credential_store,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_token_use_case(self) -> AuthenticateTokenUseCase:
        return AuthenticateTokenUseCase(tokens=self.token_service)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.credential_store)

    @cached_property
    def auth_service(self) -> AuthService:
        return AuthService(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            authenticate_use_case=self.authenticate_token_use_case,
            profile_use_case=self.get_profile_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(auth_service=self.auth_service)
