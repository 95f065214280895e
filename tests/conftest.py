import os

# Doit précéder tout import de timely : Settings lit l'environnement à l'import
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PASSWORD"] = "correct horse"
os.environ["SESSION_SECRET_KEY"] = "test-secret"
os.environ["RUN_ON_SUBPATH"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from timely.main import app
from timely.db.session import enable_sqlite_foreign_keys, get_session
from timely.db.repositories.todos import TodoRepository
from timely.features.todos.services import TodoService

PASSWORD = "correct horse"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def service(session):
    return TodoService(TodoRepository(session))


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    res = client.post("/login", data={"password": PASSWORD}, follow_redirects=False)
    assert res.status_code == 303
    assert "auth" in client.cookies
    return client
