# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from authsvc.domain.users.entities import HashParams, UserRecord
from authsvc.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from authsvc.domain.users.repositories import CredentialStore
from authsvc.infrastructure.db.models import User
from authsvc.infrastructure.db.session import SessionLocal, session_scope
from authsvc.shared.errors.base import InfrastructureError
from authsvc.shared.logging import logger


def _to_domain(row: User) -> UserRecord:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset
        created_at = created_at.replace(tzinfo=UTC)
    return UserRecord(
        id=row.id,
        identifier=row.identifier,
        password_hash=row.password_hash,
        hash_params=HashParams(method=row.hash_method, salt=row.hash_salt),
        created_at=created_at,
    )


class SqlAlchemyCredentialStore(CredentialStore):
    """Credential store over the ``users`` table.

    Uniqueness is enforced by the unique index on ``identifier``: the insert
    either lands or fails with an integrity error, so two concurrent
    registrations can never both succeed.
    """

    def __init__(self, session_factory: scoped_session[Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def create(
        self, identifier: str, password_hash: str, hash_params: HashParams
    ) -> UserRecord:
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    id=uuid.uuid4().hex,
                    identifier=identifier,
                    password_hash=password_hash,
                    hash_method=hash_params.method,
                    hash_salt=hash_params.salt,
                    created_at=datetime.now(UTC),
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info("store.create: identifier already registered")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"store.create: database error {type(exc).__name__}")
            raise InfrastructureError(context={"operation": "create"}) from exc

    def find_by_identifier(self, identifier: str) -> UserRecord:
        try:
            with session_scope(self._session_factory) as session:
                row = session.query(User).filter(User.identifier == identifier).first()
                if not row:
                    raise UserNotFoundError()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            logger.error(f"store.find_by_identifier: database error {type(exc).__name__}")
            raise InfrastructureError(context={"operation": "find_by_identifier"}) from exc

    def find_by_id(self, user_id: str) -> UserRecord:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                if not row:
                    raise UserNotFoundError()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            logger.error(f"store.find_by_id: database error {type(exc).__name__}")
            raise InfrastructureError(context={"operation": "find_by_id"}) from exc
