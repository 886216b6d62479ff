"""Error rendering shared by every endpoint."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from marketplace.core.errors import ConflictError, register_exception_handlers


@pytest.fixture()
def failing_client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    @app.get("/conflict")
    def conflict():
        raise ConflictError("Already there")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandlers:
    def test_unhandled_error_is_generic_500(self, failing_client):
        response = failing_client.get("/boom")
        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert "hunter2" not in response.text

    def test_app_error_renders_message(self, failing_client):
        response = failing_client.get("/conflict")
        assert response.status_code == 409
        assert response.json() == {"message": "Already there"}

    def test_unknown_route_renders_message(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert "message" in response.json()


class TestCheck:
    def test_liveness(self, client):
        response = client.get("/check")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
