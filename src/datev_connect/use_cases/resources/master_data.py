"""Master data resources (clients, addressees, employees and lookup tables)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations import master_data_client as md
from datev_connect.use_cases.parameters import ParameterReader
from datev_connect.use_cases.resource_dispatcher import ResourceRegistry


@dataclass(frozen=True, slots=True)
class MasterDataCollection:
    resource: str
    route: str
    operations: frozenset[str]
    id_parameter: str = ""
    data_parameter: str = ""
    # Lists without paging only forward select/filter.
    paged: bool = True


COLLECTIONS: tuple[MasterDataCollection, ...] = (
    MasterDataCollection(
        resource="client",
        route="clients",
        operations=frozenset({"getAll", "get", "update"}),
        id_parameter="clientId",
        data_parameter="clientData",
    ),
    MasterDataCollection(
        resource="addressee",
        route="addressees",
        operations=frozenset({"getAll", "update"}),
        id_parameter="addresseeId",
        data_parameter="addresseeData",
    ),
    MasterDataCollection(
        resource="employee",
        route="employees",
        operations=frozenset({"getAll", "get", "create", "update"}),
        id_parameter="employeeId",
        data_parameter="employeeData",
        paged=False,
    ),
    MasterDataCollection(
        resource="clientCategoryType",
        route="client-category-types",
        operations=frozenset({"getAll", "get", "create", "update"}),
        id_parameter="clientCategoryTypeId",
        data_parameter="clientCategoryTypeData",
        paged=False,
    ),
    MasterDataCollection(
        resource="clientGroupType",
        route="client-group-types",
        operations=frozenset({"getAll", "get", "create", "update"}),
        id_parameter="clientGroupTypeId",
        data_parameter="clientGroupTypeData",
        paged=False,
    ),
    MasterDataCollection(
        resource="corporateStructure",
        route="corporate-structures",
        operations=frozenset({"getAll", "get"}),
        id_parameter="organizationId",
    ),
    MasterDataCollection(
        "areaOfResponsibility", "area-of-responsibilities", frozenset({"getAll"}), paged=False
    ),
    MasterDataCollection("bank", "banks", frozenset({"getAll"}), paged=False),
    MasterDataCollection("countryCode", "country-codes", frozenset({"getAll"})),
    MasterDataCollection("taxAuthority", "tax-authorities", frozenset({"getAll"})),
    MasterDataCollection("relationship", "relationships", frozenset({"getAll"})),
)

# (resource, route) of the deletion logs.
DELETION_LOGS = (("client", "clients/deletion-log"), ("addressee", "addressees/deletion-log"))


def _list_query(params: ParameterReader, *, paged: bool = True) -> dict[str, Any]:
    if not paged:
        return md.list_query(
            select=params.optional_string("select"), filter=params.optional_string("filter")
        )
    return md.list_query(
        top=params.number("top", 100),
        skip=params.number("skip", 0),
        select=params.optional_string("select"),
        filter=params.optional_string("filter"),
    )


def _select(params: ParameterReader) -> dict[str, Any]:
    return {"select": params.optional_string("select")}


def _register_collection(reg: ResourceRegistry, c: MasterDataCollection) -> None:
    if "getAll" in c.operations:

        @reg.register(c.resource, "getAll")
        async def _get_all(params: ParameterReader, auth: AuthContext) -> Any:
            return await md.fetch_collection(auth, c.route, _list_query(params, paged=c.paged))

    if "get" in c.operations:

        @reg.register(c.resource, "get")
        async def _get(params: ParameterReader, auth: AuthContext) -> Any:
            item_id = params.required_string(c.id_parameter)
            return await md.fetch_item(auth, c.route, item_id, _select(params))

    if "create" in c.operations:

        @reg.register(c.resource, "create")
        async def _create(params: ParameterReader, auth: AuthContext) -> Any:
            return await md.create_item(auth, c.route, params.json_object(c.data_parameter))

    if "update" in c.operations:

        @reg.register(c.resource, "update")
        async def _update(params: ParameterReader, auth: AuthContext) -> Any:
            item_id = params.required_string(c.id_parameter)
            payload = params.json_object(c.data_parameter)
            return await md.update_item(auth, c.route, item_id, payload)


def _register_deletion_log(reg: ResourceRegistry, resource: str, route: str) -> None:
    @reg.register(resource, "getDeletionLog")
    async def _deletion_log(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.fetch_collection(auth, route, _list_query(params))


def _register_client_detail(
    reg: ResourceRegistry, name: str, detail: str, data_parameter: str
) -> None:
    @reg.register("client", f"get{name}")
    async def _get_detail(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.fetch_client_detail(
            auth,
            params.required_string("clientId"),
            detail,
            select=params.optional_string("select"),
        )

    @reg.register("client", f"update{name}")
    async def _update_detail(params: ParameterReader, auth: AuthContext) -> Any:
        client_id = params.required_string("clientId")
        # Lists of assignments, so any JSON value is accepted.
        return await md.update_client_detail(auth, client_id, detail, params.json(data_parameter))


def build_registry() -> ResourceRegistry:
    reg = ResourceRegistry("masterData")

    for collection in COLLECTIONS:
        _register_collection(reg, collection)
    for resource, route in DELETION_LOGS:
        _register_deletion_log(reg, resource, route)

    # --- clients ---

    @reg.register("client", "create")
    async def _create_client(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.create_client(
            auth, params.json_object("clientData"), max_number=params.number("maxNumber", 0)
        )

    _register_client_detail(reg, "Responsibilities", "responsibilities", "responsibilitiesData")
    _register_client_detail(reg, "ClientCategories", "client-categories", "categoriesData")
    _register_client_detail(reg, "ClientGroups", "client-groups", "groupsData")

    @reg.register("client", "getNextFreeNumber")
    async def _next_free_number(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.fetch_next_free_client_number(
            auth, start=params.number("start", 1), range=params.number("range", 0)
        )

    # --- addressees ---

    @reg.register("addressee", "get")
    async def _addressee(params: ParameterReader, auth: AuthContext) -> Any:
        query = {**_select(params), "expand": params.optional_string("expand")}
        return await md.fetch_item(auth, "addressees", params.required_string("addresseeId"), query)

    @reg.register("addressee", "create")
    async def _create_addressee(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.create_addressee(
            auth,
            params.json_object("addresseeData"),
            national_right=params.optional_string("nationalRight"),
        )

    # --- corporate structures, legal forms, relationships ---

    @reg.register("corporateStructure", "getEstablishment")
    async def _establishment(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.fetch_establishment(
            auth,
            params.required_string("organizationId"),
            params.required_string("establishmentId"),
            select=params.optional_string("select"),
        )

    @reg.register("legalForm", "getAll")
    async def _legal_forms(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.fetch_legal_forms(
            auth,
            top=params.number("top", 100),
            skip=params.number("skip", 0),
            select=params.optional_string("select"),
            national_right=params.optional_string("nationalRight"),
        )

    @reg.register("relationship", "getTypes")
    async def _relationship_types(params: ParameterReader, auth: AuthContext) -> Any:
        return await md.fetch_collection(
            auth, "relationship-types", _list_query(params, paged=False)
        )

    return reg
