from __future__ import annotations

from datetime import timedelta

import pytest
from itsdangerous import URLSafeSerializer

from authsvc.application.services.tokens import SignedTokenService, SigningKey
from authsvc.domain.users.exceptions import TokenExpiredError, TokenInvalidError

TTL = timedelta(minutes=15)


@pytest.fixture()
def key() -> SigningKey:
    return SigningKey.from_secret("unit-test-signing-key")


@pytest.fixture()
def service(key: SigningKey, clock) -> SignedTokenService:
    return SignedTokenService(signing_key=key, ttl=TTL, clock=clock)


def test_issue_stamps_issued_and_expiry(service: SignedTokenService, clock) -> None:
    token = service.issue("user-1")

    assert token.subject_id == "user-1"
    assert token.issued_at == clock.now
    assert token.expires_at == clock.now + TTL
    assert token.value.endswith(token.signature)


def test_verify_returns_subject_while_valid(service: SignedTokenService, clock) -> None:
    token = service.issue("user-1")
    clock.advance(minutes=14, seconds=59)

    assert service.verify(token.value) == "user-1"


def test_expired_token_fails_even_with_valid_signature(
    service: SignedTokenService, clock
) -> None:
    token = service.issue("user-1")
    clock.advance(minutes=15)

    # signature and payload still check out
    assert service.decode(token.value).subject_id == "user-1"
    with pytest.raises(TokenExpiredError):
        service.verify(token.value)


def test_tampered_token_is_invalid(service: SignedTokenService) -> None:
    token = service.issue("user-1")
    payload, signature = token.value.rsplit(".", 1)
    forged = f"{payload}.{'A' if signature[0] != 'A' else 'B'}{signature[1:]}"

    with pytest.raises(TokenInvalidError):
        service.verify(forged)


def test_token_from_other_key_is_invalid(service: SignedTokenService, clock) -> None:
    other = SignedTokenService(
        signing_key=SigningKey.from_secret("some-other-key"), ttl=TTL, clock=clock
    )

    with pytest.raises(TokenInvalidError):
        service.verify(other.issue("user-1").value)


@pytest.mark.parametrize("value", ["", "not-a-token", "a.b.c", "...."])
def test_garbage_is_invalid(service: SignedTokenService, value: str) -> None:
    with pytest.raises(TokenInvalidError):
        service.verify(value)


def test_correctly_signed_but_malformed_payload_is_invalid(key: SigningKey) -> None:
    import hashlib

    serializer = URLSafeSerializer(
        key.secret, salt=key.salt, signer_kwargs={"digest_method": hashlib.sha256}
    )
    service = SignedTokenService(signing_key=key, ttl=TTL)

    with pytest.raises(TokenInvalidError):
        service.verify(serializer.dumps({"sub": "user-1"}))
    with pytest.raises(TokenInvalidError):
        service.verify(serializer.dumps(["user-1"]))


def test_signing_key_requires_secret() -> None:
    with pytest.raises(ValueError):
        SigningKey(secret=b"")


def test_ttl_must_be_positive(key: SigningKey) -> None:
    with pytest.raises(ValueError):
        SignedTokenService(signing_key=key, ttl=timedelta(0))
