"""Identity & Access Management resources (SCIM users, groups, schemas)."""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations import identity_client as iam
from datev_connect.use_cases.parameters import ParameterReader
from datev_connect.use_cases.resource_dispatcher import ResourceRegistry


def _deleted(id_key: str, identifier: str, location: str | None) -> dict[str, Any]:
    record: dict[str, Any] = {id_key: identifier, "deleted": True}
    if location:
        record["location"] = location
    return record


def build_registry() -> ResourceRegistry:
    reg = ResourceRegistry("identity")

    @reg.register("serviceProviderConfig", "get")
    async def _service_provider_config(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_service_provider_config(auth)

    @reg.register("resourceType", "getAll")
    async def _resource_types(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_resource_types(auth)

    @reg.register("schema", "getAll")
    async def _schemas(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_schemas(auth)

    @reg.register("schema", "get")
    async def _schema(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_schema(auth, params.required_string("schemaId"))

    @reg.register("currentUser", "get")
    async def _current_user(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_current_user(auth)

    # --- users ---

    @reg.register("user", "getAll")
    async def _users(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_users(
            auth,
            filter=params.optional_string("filter"),
            attributes=params.optional_string("attributes"),
            start_index=params.number("startIndex", 1),
            count=params.number("count", 100),
        )

    @reg.register("user", "get")
    async def _user(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_user(auth, params.required_string("userId"))

    @reg.register("user", "create")
    async def _create_user(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.create_user(auth, params.json_object("userData"))

    @reg.register("user", "update")
    async def _update_user(params: ParameterReader, auth: AuthContext) -> Any:
        user_id = params.required_string("userId")
        return await iam.update_user(auth, user_id, params.json_object("userData"))

    @reg.register("user", "delete")
    async def _delete_user(params: ParameterReader, auth: AuthContext) -> Any:
        user_id = params.required_string("userId")
        location = await iam.delete_user(auth, user_id)
        return _deleted("userId", user_id, location)

    # --- groups ---

    @reg.register("group", "getAll")
    async def _groups(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_groups(
            auth,
            filter=params.optional_string("filter"),
            attributes=params.optional_string("attributes"),
            start_index=params.number("startIndex", 1),
            count=params.number("count", 100),
        )

    @reg.register("group", "get")
    async def _group(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.fetch_group(auth, params.required_string("groupId"))

    @reg.register("group", "create")
    async def _create_group(params: ParameterReader, auth: AuthContext) -> Any:
        return await iam.create_group(auth, params.json_object("groupData"))

    @reg.register("group", "update")
    async def _update_group(params: ParameterReader, auth: AuthContext) -> Any:
        group_id = params.required_string("groupId")
        return await iam.update_group(auth, group_id, params.json_object("groupData"))

    @reg.register("group", "delete")
    async def _delete_group(params: ParameterReader, auth: AuthContext) -> Any:
        group_id = params.required_string("groupId")
        location = await iam.delete_group(auth, group_id)
        return _deleted("groupId", group_id, location)

    return reg
