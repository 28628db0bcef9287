import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from taskpad.core import errors
from taskpad.core.errors import AppError, ErrorCode, register_exception_handlers, to_app_error


@pytest.fixture
def failing_client():
    """Petite app qui lève chaque type d'erreur"""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/app-error")
    def app_error():
        raise errors.forbidden("Not your task")

    @app.get("/db-error")
    def db_error():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    @app.get("/crash")
    def crash():
        raise RuntimeError("boom")

    @app.get("/items/{item_id}")
    def item(item_id: int):
        return {"id": item_id}

    return TestClient(app, raise_server_exceptions=False)


def assert_envelope(body, code, status_code):
    assert body["code"] == code
    assert body["statusCode"] == status_code
    assert isinstance(body["message"], str)
    assert "timestamp" in body
    assert "path" in body


@pytest.mark.parametrize("factory, code, status_code", [
    (errors.validation_error, ErrorCode.VALIDATION_ERROR, 400),
    (errors.unauthorized, ErrorCode.UNAUTHORIZED, 401),
    (errors.forbidden, ErrorCode.FORBIDDEN, 403),
    (errors.not_found, ErrorCode.NOT_FOUND, 404),
    (errors.internal_error, ErrorCode.INTERNAL_ERROR, 500),
    (errors.database_error, ErrorCode.DATABASE_ERROR, 500),
    (errors.authentication_error, ErrorCode.AUTHENTICATION_ERROR, 401),
])
def test_factories(factory, code, status_code):
    error = factory("msg")
    assert error.code is code
    assert error.status_code == status_code
    assert error.message == "msg"


def test_to_dict():
    error = errors.validation_error("bad", details={"field": "title"})
    body = error.to_dict("/api/tasks")
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"] == "bad"
    assert body["statusCode"] == 400
    assert body["path"] == "/api/tasks"
    assert body["details"] == {"field": "title"}
    assert body["timestamp"].endswith("+00:00")


def test_to_dict_without_details():
    assert "details" not in errors.not_found().to_dict()


def test_to_app_error_mapping():
    original = errors.forbidden()
    assert to_app_error(original) is original
    assert to_app_error(OperationalError("x", {}, Exception())).code is ErrorCode.DATABASE_ERROR
    assert to_app_error(ValueError("invalid input")).code is ErrorCode.VALIDATION_ERROR
    assert to_app_error(RuntimeError("?")).code is ErrorCode.INTERNAL_ERROR


def test_app_error_response(failing_client):
    response = failing_client.get("/app-error")
    assert response.status_code == 403
    body = response.json()
    assert_envelope(body, "FORBIDDEN", 403)
    assert body["message"] == "Not your task"
    assert body["path"] == "/app-error"


def test_database_error_response(failing_client):
    response = failing_client.get("/db-error")
    assert response.status_code == 500
    assert_envelope(response.json(), "DATABASE_ERROR", 500)


def test_unhandled_error_response(failing_client):
    response = failing_client.get("/crash")
    assert response.status_code == 500
    assert_envelope(response.json(), "INTERNAL_ERROR", 500)


def test_request_validation_response(failing_client):
    response = failing_client.get("/items/abc")
    assert response.status_code == 400
    body = response.json()
    assert_envelope(body, "VALIDATION_ERROR", 400)
    assert body["details"][0]["loc"] == ["path", "item_id"]


def test_method_not_allowed_response(failing_client):
    response = failing_client.post("/items/1")
    assert response.status_code == 405
    assert_envelope(response.json(), "VALIDATION_ERROR", 405)


def test_app_error_is_exception():
    with pytest.raises(AppError):
        raise errors.unauthorized()
