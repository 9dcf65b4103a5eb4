# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import (
    ENGINE,
    Base,
    SessionLocal,
    build_engine,
    engine_for,
    init_db,
    make_session_factory,
    session_factory_for,
    session_scope,
)

__all__ = [
    "Base",
    "ENGINE",
    "SessionLocal",
    "build_engine",
    "engine_for",
    "init_db",
    "make_session_factory",
    "session_factory_for",
    "session_scope",
]
