from fastapi import FastAPI
from fastapi.testclient import TestClient

from readlist_api.context import request_id_var
from readlist_api.middleware import RequestContextMiddleware


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/")
    def read_root() -> dict:
        return {"request_id": request_id_var.get()}

    return app


def test_request_id_is_propagated_from_header() -> None:
    client = TestClient(make_app())

    response = client.get("/", headers={"X-Request-Id": "req-456"})

    assert response.status_code == 200
    assert response.json() == {"request_id": "req-456"}
    assert response.headers["X-Request-Id"] == "req-456"


def test_request_id_is_generated_when_missing() -> None:
    client = TestClient(make_app())

    response = client.get("/")

    generated = response.json()["request_id"]
    assert generated.startswith("req-")
    assert response.headers["X-Request-Id"] == generated
    assert request_id_var.get() is None
