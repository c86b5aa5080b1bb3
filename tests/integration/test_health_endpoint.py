"""Integration tests for application endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from invoicecalc.backend.config.settings import load_settings
from invoicecalc.backend.version import get_project_version


def test_health_endpoint(client: FlaskClient) -> None:
    """Ensure the health endpoint returns a successful status payload."""
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["version"] == get_project_version()
    assert payload["default_currency"] == load_settings().defaults.currency
    assert response.mimetype == "application/json"
