from __future__ import annotations

import os
import tempfile
from datetime import UTC, datetime, timedelta

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="authsvc-tests-")

# must be set before authsvc.infrastructure.db builds its engine
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-signing-key-not-for-production")
os.environ.setdefault("PASSWORD_HASH_METHOD", "scrypt:1024:8:1")
os.environ.setdefault("LOG_LEVEL", "WARNING")


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def reset_database():
    from authsvc.infrastructure.db import ENGINE, Base, init_db

    init_db()
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)
