"""DATEVconnect master data (v1) endpoints.

Clients, addressees, employees and the lookup tables (tax authorities, legal
forms, banks, ...). List calls take ``top``/``skip``/``select``/``filter``; a
paging value of 0 or less is left out of the query string. Create and update
calls return the response body, which the server usually leaves empty.
"""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations.datev_http import DomainSender

MASTER_DATA = DomainSender(
    error_prefix="DATEVconnect request failed",
    base_path="datevconnect/master-data/v1",
)


def _positive(value: int | float | None) -> int | float | None:
    return value if value is not None and value > 0 else None


def list_query(
    *,
    top: int | None = None,
    skip: int | None = None,
    select: str | None = None,
    filter: str | None = None,
) -> dict[str, Any]:
    return {"top": _positive(top), "skip": _positive(skip), "select": select, "filter": filter}


async def fetch_collection(
    auth: AuthContext, route: str, query: dict[str, Any] | None = None
) -> Any:
    """GET a top-level collection such as ``tax-authorities``."""

    return await MASTER_DATA.send(auth, MASTER_DATA.path(route), query=query)


async def fetch_item(
    auth: AuthContext, route: str, item_id: str, query: dict[str, Any] | None = None
) -> Any:
    return await MASTER_DATA.send(auth, MASTER_DATA.path(route, item_id), query=query)


async def create_item(
    auth: AuthContext, route: str, payload: Any, query: dict[str, Any] | None = None
) -> Any:
    return await MASTER_DATA.send(auth, MASTER_DATA.path(route), "POST", query=query, body=payload)


async def update_item(auth: AuthContext, route: str, item_id: str, payload: Any) -> Any:
    return await MASTER_DATA.send(auth, MASTER_DATA.path(route, item_id), "PUT", body=payload)


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


async def create_client(auth: AuthContext, client: Any, *, max_number: int | None = None) -> Any:
    return await create_item(auth, "clients", client, {"max-number": _positive(max_number)})


async def fetch_client_detail(
    auth: AuthContext, client_id: str, detail: str, *, select: str | None = None
) -> Any:
    """GET one of a client's sub-resources (``responsibilities``, ``client-groups``, ...)."""

    return await MASTER_DATA.send(
        auth, MASTER_DATA.path("clients", client_id, detail), query={"select": select}
    )


async def update_client_detail(auth: AuthContext, client_id: str, detail: str, payload: Any) -> Any:
    return await MASTER_DATA.send(
        auth, MASTER_DATA.path("clients", client_id, detail), "PUT", body=payload
    )


async def fetch_next_free_client_number(
    auth: AuthContext, *, start: int | float = 1, range: int | float | None = None
) -> Any:
    return await MASTER_DATA.send(
        auth,
        MASTER_DATA.path("clients/next-free-number"),
        query={"start": start, "range": _positive(range)},
    )


# ---------------------------------------------------------------------------
# Addressees and corporate structures
# ---------------------------------------------------------------------------


async def create_addressee(
    auth: AuthContext, addressee: Any, *, national_right: str | None = None
) -> Any:
    return await create_item(auth, "addressees", addressee, {"national-right": national_right})


async def fetch_establishment(
    auth: AuthContext, organization_id: str, establishment_id: str, *, select: str | None = None
) -> Any:
    path = MASTER_DATA.path(
        "corporate-structures", organization_id, "establishments", establishment_id
    )
    return await MASTER_DATA.send(auth, path, query={"select": select})


async def fetch_legal_forms(
    auth: AuthContext,
    *,
    top: int | None = None,
    skip: int | None = None,
    select: str | None = None,
    national_right: str | None = None,
) -> Any:
    query = {**list_query(top=top, skip=skip, select=select), "national-right": national_right}
    return await fetch_collection(auth, "legal-forms", query)
