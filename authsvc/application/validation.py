# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential shape rules shared by the HTTP DTOs and the register use case."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from authsvc.shared.errors.validation import raise_validation_error

IDENTIFIER_MIN_LENGTH = 3
IDENTIFIER_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_USERNAME_RE = re.compile(r"^[a-z][a-z0-9._-]*$")
_EMAIL_RE = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9-]+(\.[a-z0-9-]+)*\.[a-z]{2,}$")

WEAK_PASSWORDS = frozenset(
    {
        "password1",
        "password123",
        "qwerty123",
        "letmein123",
        "welcome123",
        "admin12345",
    }
)


def normalize_identifier(value: str) -> str:
    return value.strip().lower()


def _check_identifier_length(value: str) -> str:
    value = normalize_identifier(value)
    if len(value) > IDENTIFIER_MAX_LENGTH:
        raise PydanticCustomError(
            "identifier_too_long",
            "Identifier must be at most {max_length} characters long",
            {"max_length": IDENTIFIER_MAX_LENGTH},
        )
    return value


def _check_identifier(value: str) -> str:
    value = _check_identifier_length(value)
    if len(value) < IDENTIFIER_MIN_LENGTH:
        raise PydanticCustomError(
            "identifier_too_short",
            "Identifier must be at least {min_length} characters long",
            {"min_length": IDENTIFIER_MIN_LENGTH},
        )
    if not (_USERNAME_RE.match(value) or _EMAIL_RE.match(value)):
        raise PydanticCustomError(
            "identifier_invalid",
            "Identifier must be an e-mail address or a username starting with a letter",
        )
    return value


def _check_password_strength(value: str) -> str:
    if not re.search(r"[A-Z]", value):
        raise PydanticCustomError(
            "password_no_uppercase",
            "Password must contain at least one uppercase letter",
        )

    if not re.search(r"[a-z]", value):
        raise PydanticCustomError(
            "password_no_lowercase",
            "Password must contain at least one lowercase letter",
        )

    if not re.search(r"\d", value):
        raise PydanticCustomError(
            "password_no_digit",
            "Password must contain at least one digit",
        )

    if value.lower() in WEAK_PASSWORDS:
        raise PydanticCustomError(
            "password_weak",
            "Password is too weak, please choose a stronger password",
        )

    return value


Identifier = Annotated[
    str,
    Field(min_length=1),
    AfterValidator(_check_identifier),
]

LoginIdentifier = Annotated[
    str,
    Field(min_length=1),
    AfterValidator(_check_identifier_length),
]

NewPassword = Annotated[
    str,
    Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH),
    AfterValidator(_check_password_strength),
]

LoginPassword = Annotated[str, Field(min_length=1, max_length=PASSWORD_MAX_LENGTH)]


class RegistrationCredentials(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    identifier: Identifier
    password: NewPassword


class LoginCredentials(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    identifier: LoginIdentifier
    password: LoginPassword


class PydanticCredentialsValidator:
    def validate_registration(self, identifier: str, password: str) -> tuple[str, str]:
        try:
            creds = RegistrationCredentials(identifier=identifier, password=password)
        except PydanticValidationError as exc:
            raise_validation_error(exc)
        return creds.identifier, creds.password


__all__ = [
    "Identifier",
    "LoginCredentials",
    "LoginIdentifier",
    "LoginPassword",
    "NewPassword",
    "PydanticCredentialsValidator",
    "RegistrationCredentials",
    "normalize_identifier",
]
