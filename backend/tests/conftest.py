"""Shared fixtures: an in-memory database per test and a wired TestClient."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from resumehub import models  # noqa: F401
from resumehub.database import Base, get_db
from resumehub.middleware.auth import create_access_token
from resumehub.middleware.rate_limit import limiter
from resumehub.models.user import UserProfile
from resumehub.schemas.auth import Identity


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def alice():
    return Identity(id="uid-alice", email="alice@example.com", display_name="Alice Doe", photo_url="")


@pytest.fixture
def bob():
    return Identity(id="uid-bob", email="bob@example.com", display_name="Bob Roe", photo_url="")


@pytest.fixture
def admin(db):
    identity = Identity(id="uid-admin", email="admin@example.com", display_name="Admin")
    db.add(UserProfile(id=identity.id, email=identity.email, display_name=identity.display_name, is_admin=True))
    db.commit()
    return identity


@pytest.fixture
def client(session_factory):
    from resumehub.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(identity: Identity) -> dict:
        return {"Authorization": f"Bearer {create_access_token(identity)}"}
    return _headers
