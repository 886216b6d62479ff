import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from marketplace.db.session import build_engine, get_session
from marketplace.main import app


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client):
    """Register a user and return ``(auth_headers, user_json)``."""

    def _register(email="alice@example.com", username="alice", password="s3cretpass"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "username": username, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _register


@pytest.fixture()
def create_product(client):
    """Create a product as the user behind ``headers`` and return its JSON."""

    def _create_product(headers, title="Desk Lamp", category="home", price=10.0, **extra):
        payload = {"title": title, "category": category, "price": price, **extra}
        response = client.post("/api/products", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["product"]

    return _create_product
