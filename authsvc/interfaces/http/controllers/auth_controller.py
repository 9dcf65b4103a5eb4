# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import cast

from flask import Blueprint

from authsvc.application.services.auth_service import AuthService
from authsvc.domain.users.exceptions import UnauthorizedError, UserAlreadyExistsError
from authsvc.infrastructure.audit import AuditAction, audit_log
from authsvc.interfaces.http.dto.auth import (
    LoginRequestDTO,
    ProfileDTO,
    RegisteredDTO,
    RegisterRequestDTO,
    TokenDTO,
)
from authsvc.interfaces.http.flask_adapter import as_blueprint
from authsvc.interfaces.http.routes import ApiRequest, ApiResponse, RouteTable
from authsvc.shared.logging import logger


class AuthController:
    """Register, login and profile handlers.

    Handlers never touch Flask; :meth:`routes` describes them and
    :meth:`as_blueprint` mounts the table under ``/api/auth``.
    """

    def __init__(self, *, auth_service: AuthService) -> None:
        self._auth = auth_service

    def register(self, req: ApiRequest) -> ApiResponse:
        dto = cast(RegisterRequestDTO, req.body)
        try:
            user = self._auth.register(dto.identifier, dto.password)
        except UserAlreadyExistsError:
            audit_log(AuditAction.REGISTER_CONFLICT, ip_address=req.client_ip, success=False)
            raise

        audit_log(AuditAction.REGISTER, user_id=user.id, ip_address=req.client_ip)
        logger.info(f"auth.register: ok user_id={user.id}")
        return ApiResponse(HTTPStatus.CREATED, RegisteredDTO(user_id=user.id).to_json())

    def login(self, req: ApiRequest) -> ApiResponse:
        dto = cast(LoginRequestDTO, req.body)
        try:
            session = self._auth.login(dto.identifier, dto.password)
        except UnauthorizedError:
            audit_log(AuditAction.LOGIN_FAILED, ip_address=req.client_ip, success=False)
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=session.subject_id, ip_address=req.client_ip)
        payload = TokenDTO(token=session.value, expires_at=session.expires_at)
        return ApiResponse(HTTPStatus.OK, payload.to_json())

    def profile(self, req: ApiRequest) -> ApiResponse:
        if req.subject_id is None:
            raise UnauthorizedError()
        user = self._auth.profile(req.subject_id)
        audit_log(AuditAction.PROFILE_VIEWED, user_id=user.id, ip_address=req.client_ip)
        payload = ProfileDTO(user_id=user.id, identifier=user.identifier)
        return ApiResponse(HTTPStatus.OK, payload.to_json())

    def routes(self) -> RouteTable:
        table = RouteTable()
        table.add("POST", "/register", self.register, body_model=RegisterRequestDTO)
        table.add("POST", "/login", self.login, body_model=LoginRequestDTO)
        table.add("GET", "/profile", self.profile, requires_auth=True)
        return table

    def as_blueprint(self) -> Blueprint:
        return as_blueprint(
            self.routes(),
            name="auth",
            url_prefix="/api/auth",
            authenticate=self._auth.authenticate,
        )
