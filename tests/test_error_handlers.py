import json

import pytest
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient

from sports_store.main import app, validation_exception_handler


def test_unknown_route_uses_error_body():
    response = TestClient(app).get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_body():
    response = TestClient(app).delete("/api/catalog/categories")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert "GET" in response.headers["allow"]


@pytest.mark.asyncio
async def test_request_validation_uses_error_body():
    exc = RequestValidationError([
        {"loc": ("query", "category"), "msg": "Field required", "type": "missing"},
    ])

    response = await validation_exception_handler(None, exc)

    assert response.status_code == 422
    assert json.loads(response.body) == {"error": "query.category: Field required"}
