"""
End-to-end tests through the FastAPI app and the /graphql endpoint
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from postboard.api.app import app
from postboard.config import settings

pytestmark = pytest.mark.integration

REGISTER = """
mutation Register($username: String!, $password: String!) {
  register(options: {username: $username, password: $password}) {
    errors { message }
    user { id username }
  }
}
"""


@pytest.fixture
def client(migrated_database):
    # Schema already migrated by the fixture
    with patch.object(settings, "run_migrations_on_startup", False):
        with TestClient(app) as test_client:
            yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


def test_register_and_duplicate_over_http(client):
    body = {"query": REGISTER, "variables": {"username": "alice", "password": "hunter22"}}

    first = client.post("/graphql", json=body)
    second = client.post("/graphql", json=body)

    assert first.status_code == 200
    assert first.json()["data"]["register"]["user"]["username"] == "alice"
    assert second.json()["data"]["register"] == {
        "errors": [{"message": "Username already exists."}],
        "user": None,
    }


def test_storage_failure_becomes_graphql_error(client):
    from sqlalchemy.exc import OperationalError

    body = {
        "query": "mutation { login(options: {username: \"alice\", password: \"hunter22\"}) "
        "{ errors { message } } }"
    }
    with patch(
        "sqlalchemy.ext.asyncio.AsyncSession.execute",
        side_effect=OperationalError("SELECT", {}, Exception("database is gone")),
    ):
        response = client.post("/graphql", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"] is None
    assert payload["errors"][0]["message"] == (
        "Unable to complete request. Please try again later."
    )
    # The driver's message stays in the logs
    assert "database is gone" not in response.text
