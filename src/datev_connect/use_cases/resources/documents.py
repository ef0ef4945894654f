"""Document Management (DMS) resources."""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations import document_management_client as dms
from datev_connect.use_cases.parameters import ParameterReader
from datev_connect.use_cases.resource_dispatcher import ResourceRegistry


def _register_individual_references(reg: ResourceRegistry, which: int) -> None:
    resource = f"individualReference{which}"

    @reg.register(resource, "getAll")
    async def _list(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_individual_references(
            auth, which, top=params.number("top", 0), skip=params.number("skip", 0)
        )

    @reg.register(resource, "create")
    async def _create(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.create_individual_reference(
            auth, which, params.json_object("individualReferenceData")
        )


def build_registry() -> ResourceRegistry:
    reg = ResourceRegistry("documentManagement")

    # --- documents ---

    @reg.register("document", "getAll")
    async def _documents(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_documents(
            auth,
            filter=params.optional_string("filter"),
            top=params.number("top", 0),
            skip=params.number("skip", 0),
        )

    @reg.register("document", "get")
    async def _document(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_document(auth, params.required_string("documentId"))

    @reg.register("document", "create")
    async def _create_document(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.create_document(auth, params.json_object("documentData"))

    @reg.register("document", "update")
    async def _update_document(params: ParameterReader, auth: AuthContext) -> Any:
        document_id = params.required_string("documentId")
        return await dms.update_document(auth, document_id, params.json_object("documentData"))

    @reg.register("document", "delete")
    async def _delete_document(params: ParameterReader, auth: AuthContext) -> Any:
        document_id = params.required_string("documentId")
        await dms.delete_document(auth, document_id)
        return {"documentId": document_id, "deleted": True}

    @reg.register("document", "deletePermanently")
    async def _delete_document_permanently(params: ParameterReader, auth: AuthContext) -> Any:
        document_id = params.required_string("documentId")
        await dms.delete_document_permanently(auth, document_id)
        return {"documentId": document_id, "permanentlyDeleted": True}

    # --- structure items and dispatcher information ---

    @reg.register("document", "getStructureItems")
    async def _structure_items(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_structure_items(
            auth,
            params.required_string("documentId"),
            top=params.number("top", 0),
            skip=params.number("skip", 0),
        )

    @reg.register("document", "getStructureItem")
    async def _structure_item(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_structure_item(
            auth, params.required_string("documentId"), params.required_string("structureItemId")
        )

    @reg.register("document", "addStructureItem")
    async def _add_structure_item(params: ParameterReader, auth: AuthContext) -> Any:
        document_id = params.required_string("documentId")
        return await dms.add_structure_item(
            auth,
            document_id,
            params.json_object("structureItemData"),
            insert_position=params.optional_string("insertPosition") or "last",
        )

    @reg.register("document", "updateStructureItem")
    async def _update_structure_item(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.update_structure_item(
            auth,
            params.required_string("documentId"),
            params.required_string("structureItemId"),
            params.json_object("structureItemData"),
        )

    @reg.register("document", "createDispatcherInformation")
    async def _dispatcher_information(params: ParameterReader, auth: AuthContext) -> Any:
        document_id = params.required_string("documentId")
        return await dms.create_dispatcher_information(
            auth, document_id, params.json_object("dispatcherData")
        )

    # --- document states ---

    @reg.register("documentState", "getAll")
    async def _document_states(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_document_states(auth, filter=params.optional_string("filter"))

    @reg.register("documentState", "get")
    async def _document_state(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_document_state(auth, params.required_string("stateId"))

    @reg.register("documentState", "create")
    async def _create_document_state(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.create_document_state(auth, params.json_object("stateData"))

    # --- lookups ---

    @reg.register("domain", "getAll")
    async def _domains(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_domains(auth, filter=params.optional_string("filter"))

    @reg.register("info", "get")
    async def _info(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_info(auth)

    @reg.register("secureArea", "getAll")
    async def _secure_areas(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_secure_areas(auth)

    @reg.register("propertyTemplate", "getAll")
    async def _property_templates(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_property_templates(auth, filter=params.optional_string("filter"))

    @reg.register("individualProperty", "getAll")
    async def _individual_properties(params: ParameterReader, auth: AuthContext) -> Any:
        return await dms.fetch_individual_properties(auth)

    _register_individual_references(reg, 1)
    _register_individual_references(reg, 2)

    return reg
