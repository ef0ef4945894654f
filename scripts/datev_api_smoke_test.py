"""Smoke test: log in to DATEVconnect and run a few read-only operations.

Env vars:
- DATEV_HOST
- DATEV_EMAIL
- DATEV_PASSWORD
- DATEV_CLIENT_INSTANCE_ID
- DATEV_HTTP_TIMEOUT_SECONDS (optional) [default: 30]

Optional (for the DMS document list):
- DATEV_DOCUMENT_FILTER, e.g. "number eq 12345"

Run:
  python scripts/datev_api_smoke_test.py
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any

from dotenv import load_dotenv

from datev_connect.config.settings import DatevSettings
from datev_connect.use_cases.execution_host import StaticExecutionHost
from datev_connect.use_cases.resource_dispatcher import run_node
from datev_connect.use_cases.resources import get_registry

load_dotenv()

# Convenience: allow loading credentials from `.env.example` if `.env` is missing.
if not os.environ.get("DATEV_HOST"):
    load_dotenv(dotenv_path=os.path.abspath(".env.example"), override=False)


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise SystemExit(
            f"Missing env var {name}. Put it in your .env/.env.example and export it before running."
        )
    return value


def _preview(records: list[dict[str, Any]], limit: int = 3) -> str:
    return json.dumps(records[:limit], indent=2, ensure_ascii=False)


async def _run(domain: str, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    settings = DatevSettings.from_env()
    host = StaticExecutionHost(items=items, continue_on_failure=True)
    return await run_node(host, settings.credentials(), get_registry(domain))


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    for name in ("DATEV_HOST", "DATEV_EMAIL", "DATEV_PASSWORD", "DATEV_CLIENT_INSTANCE_ID"):
        _require_env(name)

    print("Listing clients...")
    clients = asyncio.run(_run("datevConnect", [{"resource": "client", "operation": "getAll", "top": 5}]))
    print(f"✅ {len(clients)} record(s)")
    print(_preview(clients))

    print("\nReading current IAM user...")
    me = asyncio.run(_run("identity", [{"resource": "currentUser", "operation": "get"}]))
    print(_preview(me))

    doc_filter = os.environ.get("DATEV_DOCUMENT_FILTER")
    if doc_filter:
        print(f"\nListing DMS documents for filter={doc_filter!r}...")
        docs = asyncio.run(
            _run(
                "documentManagement",
                [{"resource": "document", "operation": "getAll", "filter": doc_filter, "top": 10}],
            )
        )
        print(f"✅ {len(docs)} record(s)")
        print(_preview(docs))
    else:
        print("\nSkipped DMS document list (set DATEV_DOCUMENT_FILTER to enable).")


if __name__ == "__main__":
    main()
