"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authsvc.domain.users.entities import HashParams
from authsvc.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted scrypt (or pbkdf2) hashing through werkzeug.

    werkzeug encodes a hash as ``method$salt$digest``; the method and salt
    are split off into :class:`HashParams` so the digest can be stored on
    its own.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> tuple[str, HashParams]:
        encoded = generate_password_hash(
            password, method=self._method, salt_length=self._salt_length
        )
        method, salt, digest = encoded.split("$", 2)
        return digest, HashParams(method=method, salt=salt)

    def verify(self, password: str, hashed: str, params: HashParams) -> bool:
        if not (isinstance(password, str) and isinstance(hashed, str) and hashed):
            return False
        try:
            encoded = f"{params.method}${params.salt}${hashed}"
            return bool(check_password_hash(encoded, password))
        except (ValueError, TypeError, AttributeError):
            return False
