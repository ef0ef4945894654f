"""Environment-backed configuration for DATEVconnect access.

Env vars
- DATEV_HOST
- DATEV_EMAIL
- DATEV_PASSWORD
- DATEV_CLIENT_INSTANCE_ID
- DATEV_HTTP_TIMEOUT_SECONDS (optional) [default: 30]
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from pydantic import ValidationError

from datev_connect.common.errors import NodeOperationError
from datev_connect.common.models import DatevCredentials

load_dotenv(override=False)

DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0


def http_timeout_from_env() -> float:
    return float(os.environ.get("DATEV_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS))


def validate_credentials(raw: DatevCredentials | dict) -> DatevCredentials:
    if isinstance(raw, DatevCredentials):
        return raw
    try:
        return DatevCredentials.model_validate(raw)
    except ValidationError as e:
        raise NodeOperationError("All DATEVconnect credential fields must be provided") from e


@dataclass(frozen=True, slots=True)
class DatevSettings:
    host: str
    email: str
    password: str
    client_instance_id: str
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "DatevSettings":
        load_dotenv(override=False)
        values = {
            "DATEV_HOST": os.environ.get("DATEV_HOST"),
            "DATEV_EMAIL": os.environ.get("DATEV_EMAIL"),
            "DATEV_PASSWORD": os.environ.get("DATEV_PASSWORD"),
            "DATEV_CLIENT_INSTANCE_ID": os.environ.get("DATEV_CLIENT_INSTANCE_ID"),
        }
        missing = [k for k, v in values.items() if not v]
        if missing:
            raise ValueError(f"Missing {', '.join(missing)}")

        return cls(
            host=values["DATEV_HOST"],
            email=values["DATEV_EMAIL"],
            password=values["DATEV_PASSWORD"],
            client_instance_id=values["DATEV_CLIENT_INSTANCE_ID"],
            http_timeout_seconds=http_timeout_from_env(),
        )

    def credentials(self) -> DatevCredentials:
        return validate_credentials(
            {
                "host": self.host,
                "email": self.email,
                "password": self.password,
                "client_instance_id": self.client_instance_id,
            }
        )
