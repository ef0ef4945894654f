"""DATEV Document Management System (DMS v2) endpoints.

Paging values of 0 mean "not set" for every DMS list call and are left out of
the query string.
"""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations.datev_http import DomainSender, created_or_location

DMS = DomainSender(
    error_prefix="DATEV DMS request failed",
    base_path="datev/api/dms/v2",
    tenant_header="X-DATEV-Client-Instance-Id",
)


def _paging(top: int | None, skip: int | None) -> dict[str, Any]:
    return {"top": top or None, "skip": skip or None}


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


async def fetch_documents(
    auth: AuthContext,
    *,
    filter: str | None = None,
    top: int | None = None,
    skip: int | None = None,
) -> Any:
    return await DMS.send(auth, DMS.path("documents"), query={"filter": filter, **_paging(top, skip)})


async def fetch_document(auth: AuthContext, document_id: str) -> Any:
    return await DMS.send(auth, DMS.path("documents", document_id))


async def create_document(auth: AuthContext, document: Any) -> Any:
    result = await DMS.send_request(auth, DMS.path("documents"), "POST", body=document)
    return created_or_location(result)


async def update_document(auth: AuthContext, document_id: str, document: Any) -> Any:
    result = await DMS.send_request(auth, DMS.path("documents", document_id), "PUT", body=document)
    return created_or_location(result, documentId=document_id)


async def delete_document(auth: AuthContext, document_id: str) -> None:
    await DMS.send(auth, DMS.path("documents", document_id), "DELETE")


async def delete_document_permanently(auth: AuthContext, document_id: str) -> None:
    await DMS.send(auth, DMS.path("documents", document_id, "delete-permanently"), "DELETE")


async def fetch_structure_items(
    auth: AuthContext,
    document_id: str,
    *,
    top: int | None = None,
    skip: int | None = None,
) -> Any:
    return await DMS.send(
        auth, DMS.path("documents", document_id, "structure-items"), query=_paging(top, skip)
    )


async def fetch_structure_item(auth: AuthContext, document_id: str, structure_item_id: str) -> Any:
    return await DMS.send(
        auth, DMS.path("documents", document_id, "structure-items", structure_item_id)
    )


async def add_structure_item(
    auth: AuthContext, document_id: str, structure_item: Any, *, insert_position: str = "last"
) -> Any:
    result = await DMS.send_request(
        auth,
        DMS.path("documents", document_id, "structure-items"),
        "POST",
        query={"insertPosition": insert_position},
        body=structure_item,
    )
    return created_or_location(result)


async def update_structure_item(
    auth: AuthContext, document_id: str, structure_item_id: str, structure_item: Any
) -> Any:
    result = await DMS.send_request(
        auth,
        DMS.path("documents", document_id, "structure-items", structure_item_id),
        "PUT",
        body=structure_item,
    )
    return created_or_location(result, documentId=document_id, structureItemId=structure_item_id)


async def create_dispatcher_information(
    auth: AuthContext, document_id: str, dispatcher: Any
) -> Any:
    result = await DMS.send_request(
        auth, DMS.path("documents", document_id, "dispatcher-information"), "POST", body=dispatcher
    )
    return created_or_location(result, documentId=document_id)


# ---------------------------------------------------------------------------
# Document states, domains and lookups
# ---------------------------------------------------------------------------


async def fetch_document_states(auth: AuthContext, *, filter: str | None = None) -> Any:
    return await DMS.send(auth, DMS.path("documentstates"), query={"filter": filter})


async def fetch_document_state(auth: AuthContext, state_id: str) -> Any:
    return await DMS.send(auth, DMS.path("documentstates", state_id))


async def create_document_state(auth: AuthContext, state: Any) -> Any:
    result = await DMS.send_request(auth, DMS.path("documentstates"), "POST", body=state)
    return created_or_location(result)


async def fetch_domains(auth: AuthContext, *, filter: str | None = None) -> Any:
    return await DMS.send(auth, DMS.path("domains"), query={"filter": filter})


async def fetch_info(auth: AuthContext) -> Any:
    return await DMS.send(auth, DMS.path("info"))


async def fetch_secure_areas(auth: AuthContext) -> Any:
    return await DMS.send(auth, DMS.path("secure-areas"))


async def fetch_property_templates(auth: AuthContext, *, filter: str | None = None) -> Any:
    return await DMS.send(auth, DMS.path("property-templates"), query={"filter": filter})


async def fetch_individual_properties(auth: AuthContext) -> Any:
    return await DMS.send(auth, DMS.path("individual-properties"))


# ---------------------------------------------------------------------------
# Individual references (two parallel collections)
# ---------------------------------------------------------------------------


def _individual_references_route(which: int) -> str:
    if which not in (1, 2):
        raise ValueError(f"Unknown individual reference collection: {which}")
    return f"individual-references{which}"


async def fetch_individual_references(
    auth: AuthContext,
    which: int,
    *,
    top: int | None = None,
    skip: int | None = None,
) -> Any:
    route = _individual_references_route(which)
    return await DMS.send(auth, DMS.path(route), query=_paging(top, skip))


async def create_individual_reference(auth: AuthContext, which: int, reference: Any) -> Any:
    route = _individual_references_route(which)
    result = await DMS.send_request(auth, DMS.path(route), "POST", body=reference)
    return created_or_location(result)
