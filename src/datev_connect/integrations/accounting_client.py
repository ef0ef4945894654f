"""DATEVconnect accounting (v1) endpoints.

Everything below a client is scoped by fiscal year:
``clients/{clientId}/fiscal-years/{fiscalYearId}/<collection>``.
A collection route is a literal path and may span several segments
(``posting-proposals/rules/incoming``); identifiers after it are
percent-encoded. List calls take an OData-style query dict
(top/skip/select/filter/expand) built by the caller.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from datev_connect.common.models import AuthContext
from datev_connect.integrations.datev_http import DomainSender, created_or_location

ACCOUNTING = DomainSender(
    error_prefix="DATEVconnect request failed",
    base_path="datevconnect/accounting/v1",
)


def _encode(value: Any) -> str:
    return quote(str(value), safe="")


def _fiscal_year_path(
    client_id: str, fiscal_year_id: str, route: str | None = None, *ids: Any
) -> str:
    path = ACCOUNTING.path("clients", client_id, "fiscal-years", fiscal_year_id)
    if route:
        path = f"{path}/{route}"
    return "/".join([path, *(_encode(i) for i in ids)])


def nested_route(parent_route: str, parent_id: str, collection: str) -> str:
    """Route of a collection below one item, e.g. ``cost-systems/{id}/cost-centers``."""

    return f"{parent_route}/{_encode(parent_id)}/{collection}"


async def fetch_clients(auth: AuthContext, query: dict[str, Any] | None = None) -> Any:
    return await ACCOUNTING.send(auth, ACCOUNTING.path("clients"), query=query)


async def fetch_client(auth: AuthContext, client_id: str, query: dict[str, Any] | None = None) -> Any:
    return await ACCOUNTING.send(auth, ACCOUNTING.path("clients", client_id), query=query)


async def fetch_fiscal_years(
    auth: AuthContext, client_id: str, query: dict[str, Any] | None = None
) -> Any:
    return await ACCOUNTING.send(
        auth, ACCOUNTING.path("clients", client_id, "fiscal-years"), query=query
    )


async def fetch_fiscal_year(
    auth: AuthContext, client_id: str, fiscal_year_id: str, query: dict[str, Any] | None = None
) -> Any:
    return await ACCOUNTING.send(auth, _fiscal_year_path(client_id, fiscal_year_id), query=query)


async def fetch_collection(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    collection: str,
    query: dict[str, Any] | None = None,
) -> Any:
    """GET a fiscal-year scoped collection, e.g. ``accounts-receivable``."""

    return await ACCOUNTING.send(
        auth, _fiscal_year_path(client_id, fiscal_year_id, collection), query=query
    )


async def fetch_collection_item(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    collection: str,
    item_id: str,
    query: dict[str, Any] | None = None,
) -> Any:
    return await ACCOUNTING.send(
        auth, _fiscal_year_path(client_id, fiscal_year_id, collection, item_id), query=query
    )


async def create_collection_item(
    auth: AuthContext, client_id: str, fiscal_year_id: str, collection: str, payload: Any
) -> Any:
    result = await ACCOUNTING.send_request(
        auth, _fiscal_year_path(client_id, fiscal_year_id, collection), "POST", body=payload
    )
    return created_or_location(result)


async def update_collection_item(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    collection: str,
    item_id: str,
    payload: Any,
) -> Any:
    result = await ACCOUNTING.send_request(
        auth,
        _fiscal_year_path(client_id, fiscal_year_id, collection, item_id),
        "PUT",
        body=payload,
    )
    return created_or_location(result)


async def fetch_accounting_records(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    accounting_sequence_id: str,
    query: dict[str, Any] | None = None,
) -> Any:
    path = _fiscal_year_path(
        client_id, fiscal_year_id, "accounting-sequences", accounting_sequence_id, "accounting-records"
    )
    return await ACCOUNTING.send(auth, path, query=query)


async def fetch_accounting_record(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    accounting_sequence_id: str,
    accounting_record_id: str,
    query: dict[str, Any] | None = None,
) -> Any:
    path = _fiscal_year_path(
        client_id,
        fiscal_year_id,
        "accounting-sequences",
        accounting_sequence_id,
        "accounting-records",
        accounting_record_id,
    )
    return await ACCOUNTING.send(auth, path, query=query)


async def create_cost_sequence(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    cost_system_id: str,
    cost_sequence_id: str,
    payload: Any,
) -> Any:
    route = nested_route("cost-systems", cost_system_id, "cost-sequences")
    path = _fiscal_year_path(client_id, fiscal_year_id, route, cost_sequence_id)
    result = await ACCOUNTING.send_request(auth, path, "POST", body=payload)
    return created_or_location(result, costSequenceId=cost_sequence_id)


async def fetch_cost_accounting_records(
    auth: AuthContext,
    client_id: str,
    fiscal_year_id: str,
    cost_system_id: str,
    cost_sequence_id: str,
    query: dict[str, Any] | None = None,
) -> Any:
    route = nested_route("cost-systems", cost_system_id, "cost-sequences")
    path = _fiscal_year_path(
        client_id, fiscal_year_id, route, cost_sequence_id, "cost-accounting-records"
    )
    return await ACCOUNTING.send(auth, path, query=query)
