from __future__ import annotations

import pytest

from datev_connect.common.errors import NodeOperationError
from datev_connect.common.models import DatevCredentials
from datev_connect.config import settings as settings_module
from datev_connect.config.settings import DatevSettings, http_timeout_from_env, validate_credentials

_ENV = {
    "DATEV_HOST": "https://datev.example.com",
    "DATEV_EMAIL": "ops@example.com",
    "DATEV_PASSWORD": "secret",
    "DATEV_CLIENT_INSTANCE_ID": "tenant-1",
}


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda **kwargs: False)


def test_from_env_reads_all_values(monkeypatch) -> None:
    for key, value in _ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("DATEV_HTTP_TIMEOUT_SECONDS", "5")

    s = DatevSettings.from_env()

    assert s.host == "https://datev.example.com"
    assert s.client_instance_id == "tenant-1"
    assert s.http_timeout_seconds == 5.0
    assert s.credentials() == DatevCredentials(
        host="https://datev.example.com",
        email="ops@example.com",
        password="secret",
        client_instance_id="tenant-1",
    )


def test_from_env_lists_missing_values(monkeypatch) -> None:
    for key in _ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATEV_HOST", "https://datev.example.com")

    with pytest.raises(ValueError) as excinfo:
        DatevSettings.from_env()

    assert str(excinfo.value) == (
        "Missing DATEV_EMAIL, DATEV_PASSWORD, DATEV_CLIENT_INSTANCE_ID"
    )


def test_http_timeout_default(monkeypatch) -> None:
    monkeypatch.delenv("DATEV_HTTP_TIMEOUT_SECONDS", raising=False)
    assert http_timeout_from_env() == 30.0


def test_validate_credentials_strips_and_rejects_blank() -> None:
    creds = validate_credentials(
        {"host": " https://h ", "email": "e", "password": "p", "client_instance_id": "c"}
    )
    assert creds.host == "https://h"
    assert validate_credentials(creds) is creds

    with pytest.raises(NodeOperationError, match="All DATEVconnect credential fields must be provided"):
        validate_credentials({"host": "https://h", "email": "   ", "password": "p", "client_instance_id": "c"})
