from __future__ import annotations

import os
import tempfile
from typing import Generator, Any

# Cheap hashes for tests; must be set before settings are imported
os.environ.setdefault("LEDGER_BCRYPT_ROUNDS", "4")

import pytest
from sqlalchemy.orm import sessionmaker

from ledgerbook.core.database import Base, get_db, init_db, make_engine
from ledgerbook.main import app
from ledgerbook import models
from ledgerbook.services.credential_service import CredentialManager

DEMO_PASSWORD = "password123"


@pytest.fixture(scope="session")
def test_db_url() -> Generator[str, Any, Any]:
    # Temporary file SQLite so the developer database is never touched
    fd, path = tempfile.mkstemp(prefix="ledger_test_", suffix=".sqlite3")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(test_db_url: str):
    eng = make_engine(test_db_url)
    init_db(eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Any, Any, Any]:
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    # One demo user per test; "bank" carries sub-labels for sub checks
    user = models.User(name="Demo User", email="demo@example.com")
    CredentialManager().set_password(user, DEMO_PASSWORD)
    user.accounts = [
        {"id": "cash", "color": "green", "subs": []},
        {"id": "bank", "color": "red", "subs": ["checking", "savings"]},
    ]
    session.add(user)
    session.commit()

    try:
        yield session
    finally:
        session.close()
        with engine.begin() as conn:
            conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
            for tbl in reversed(Base.metadata.sorted_tables):
                conn.execute(tbl.delete())
            conn.exec_driver_sql("PRAGMA foreign_keys=ON")


@pytest.fixture()
def demo_user(db_session) -> models.User:
    return db_session.query(models.User).filter_by(email="demo@example.com").one()


@pytest.fixture(autouse=True)
def override_dependency(db_session):
    # FastAPI DI override
    def _get_db_override():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db_session, demo_user):
    from fastapi.testclient import TestClient
    with TestClient(app, headers={"X-User-Id": str(demo_user.id)}) as c:
        yield c


@pytest.fixture()
def anon_client(db_session):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c
