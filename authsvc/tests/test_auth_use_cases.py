from __future__ import annotations

from datetime import timedelta

import pytest

from authsvc.application.services.auth_service import AuthService
from authsvc.application.services.tokens import SignedTokenService, SigningKey
from authsvc.application.use_cases.users.authenticate_token import AuthenticateTokenUseCase
from authsvc.application.use_cases.users.get_profile import GetProfileUseCase
from authsvc.application.use_cases.users.login_user import LoginUserUseCase
from authsvc.application.use_cases.users.register_user import RegisterUserUseCase
from authsvc.application.validation import PydanticCredentialsValidator
from authsvc.domain.users.entities import HashParams
from authsvc.domain.users.exceptions import (
    InvalidCredentialsError,
    UnauthorizedError,
    UserAlreadyExistsError,
)
from authsvc.domain.users.repositories import PasswordHasher
from authsvc.infrastructure.repositories.users.in_memory_credential_store import (
    InMemoryCredentialStore,
)
from authsvc.shared.errors.base import ValidationError


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> tuple[str, HashParams]:
        return f"hashed:{password}", HashParams(method="plain", salt="-")

    def verify(self, password: str, hashed: str, params: HashParams) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def tokens(clock) -> SignedTokenService:
    return SignedTokenService(
        signing_key=SigningKey.from_secret("use-case-key"),
        ttl=timedelta(hours=1),
        clock=clock,
    )


@pytest.fixture()
def service(
    users: InMemoryCredentialStore, hasher: DeterministicHasher, tokens: SignedTokenService
) -> AuthService:
    return AuthService(
        register_use_case=RegisterUserUseCase(
            users=users, password_hasher=hasher, validator=PydanticCredentialsValidator()
        ),
        login_use_case=LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher),
        authenticate_use_case=AuthenticateTokenUseCase(tokens=tokens),
        profile_use_case=GetProfileUseCase(users=users),
    )


def test_register_user_success(service: AuthService, users: InMemoryCredentialStore) -> None:
    user = service.register("alice@x.com", "Secret123!")

    assert user.identifier == "alice@x.com"
    assert user.password_hash == "hashed:Secret123!"
    assert users.find_by_identifier("alice@x.com") == user


def test_register_normalizes_identifier(service: AuthService) -> None:
    user = service.register("  Alice@X.com ", "Secret123!")

    assert user.identifier == "alice@x.com"


def test_register_user_duplicate_raises(service: AuthService) -> None:
    service.register("alice@x.com", "Secret123!")

    with pytest.raises(UserAlreadyExistsError):
        service.register("ALICE@x.com", "Other4567!")


@pytest.mark.parametrize(
    ("identifier", "password"),
    [
        ("", "Secret123!"),
        ("al", "Secret123!"),
        ("not an email", "Secret123!"),
        ("alice@x.com", "short1A"),
        ("alice@x.com", "alllowercase1"),
        ("alice@x.com", "Password123"),
        ("alice@x.com", "A" * 120 + "a1" + "x" * 10),
    ],
)
def test_register_rejects_invalid_input(
    service: AuthService, users: InMemoryCredentialStore, identifier: str, password: str
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        service.register(identifier, password)

    assert exc_info.value.code == "invalid_input"
    assert password not in str(exc_info.value.to_dict())
    assert len(users) == 0


def test_register_then_login_then_authenticate(service: AuthService) -> None:
    user = service.register("alice@x.com", "Secret123!")

    token = service.login("alice@x.com", "Secret123!")

    assert token.subject_id == user.id
    assert service.authenticate(token.value) == user.id


def test_login_wrong_password_and_unknown_user_are_indistinguishable(
    service: AuthService, hasher: DeterministicHasher
) -> None:
    service.register("alice@x.com", "Secret123!")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        service.login("alice@x.com", "Wrong123!")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        service.login("bob@x.com", "Secret123!")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == unknown_user.value.status
    # the unknown identifier still paid for a hash comparison
    assert hasher.verify_calls == 2


@pytest.mark.parametrize("identifier", [None, 12345, ["alice@x.com"]])
def test_login_with_non_string_identifier_is_unauthorized(
    service: AuthService, hasher: DeterministicHasher, identifier: object
) -> None:
    service.register("alice@x.com", "Secret123!")

    with pytest.raises(InvalidCredentialsError):
        service.login(identifier, "Secret123!")  # type: ignore[arg-type]

    assert hasher.verify_calls == 1


def test_authenticate_maps_expired_token_to_unauthorized(service: AuthService, clock) -> None:
    service.register("alice@x.com", "Secret123!")
    token = service.login("alice@x.com", "Secret123!")
    clock.advance(hours=1)

    with pytest.raises(UnauthorizedError) as exc_info:
        service.authenticate(token.value)

    assert exc_info.value.code == "unauthorized"


@pytest.mark.parametrize("value", [None, "", "garbage"])
def test_authenticate_maps_bad_tokens_to_unauthorized(service: AuthService, value) -> None:
    with pytest.raises(UnauthorizedError) as exc_info:
        service.authenticate(value)

    assert exc_info.value.code == "unauthorized"


def test_profile_of_unknown_subject_is_unauthorized(service: AuthService) -> None:
    with pytest.raises(UnauthorizedError):
        service.profile("0" * 32)


def test_profile_returns_record(service: AuthService) -> None:
    user = service.register("alice@x.com", "Secret123!")

    assert service.profile(user.id).identifier == "alice@x.com"
