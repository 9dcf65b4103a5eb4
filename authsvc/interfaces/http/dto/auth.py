from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from authsvc.application.validation import LoginCredentials, RegistrationCredentials


class RegisterRequestDTO(RegistrationCredentials):
    pass


class LoginRequestDTO(LoginCredentials):
    pass


class _ResponseDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True, frozen=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RegisteredDTO(_ResponseDTO):
    user_id: str


class TokenDTO(_ResponseDTO):
    token: str
    token_type: str = "Bearer"
    expires_at: datetime


class ProfileDTO(_ResponseDTO):
    user_id: str
    identifier: str
