import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ANON_KEY"] = "anon-test-key"

import pytest
from fastapi.testclient import TestClient

from app.core.db import Base, SessionLocal, engine, init_db
from app.main import app

from helpers import register


@pytest.fixture(autouse=True)
def fresh_database():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def alice(client):
    return register(client, "alice@example.com", "Alice")


@pytest.fixture
def bob(client):
    return register(client, "bob@example.com", "Bob")


@pytest.fixture
def carol(client):
    return register(client, "carol@example.com", "Carol")
