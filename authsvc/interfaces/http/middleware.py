# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from authsvc.domain.users.exceptions import UnauthorizedError
from authsvc.shared.errors.base import ValidationError
from authsvc.shared.errors.validation import raise_validation_error

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def authenticate_request(
    authorization: str | None, authenticate: Callable[[str | None], str]
) -> str:
    token = extract_bearer_token(authorization)
    if token is None:
        raise UnauthorizedError()
    return authenticate(token)


def validate_body(model: type[ModelT], payload: Mapping[str, Any] | None) -> ModelT:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            context={"fields": [], "errors": [{"field": "body", "type": "json_object_expected"}]}
        )
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = ["authenticate_request", "extract_bearer_token", "validate_body"]
