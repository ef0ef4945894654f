"""DATEV Identity & Access Management (SCIM) endpoints."""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations.datev_http import DomainSender, created_or_location

IAM = DomainSender(error_prefix="DATEV IAM request failed", base_path="datevconnect/iam/v1")


async def fetch_service_provider_config(auth: AuthContext) -> Any:
    data = await IAM.send(auth, IAM.path("ServiceProviderConfig"))
    return IAM.require(data, "service provider configuration")


async def fetch_resource_types(auth: AuthContext) -> Any:
    data = await IAM.send(auth, IAM.path("ResourceTypes"))
    return IAM.require(data, "resource types")


async def fetch_schemas(auth: AuthContext) -> Any:
    data = await IAM.send(auth, IAM.path("Schemas"))
    return IAM.require(data, "schema list")


async def fetch_schema(auth: AuthContext, schema_id: str) -> Any:
    data = await IAM.send(auth, IAM.path("Schemas", schema_id))
    return IAM.require(data, "schema")


def _list_query(
    *,
    filter: str | None,
    attributes: str | None,
    start_index: int | None,
    count: int | None,
) -> dict[str, Any]:
    return {
        "filter": filter,
        "startIndex": start_index,
        "count": count,
        "attributes": attributes,
    }


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


async def fetch_users(
    auth: AuthContext,
    *,
    filter: str | None = None,
    attributes: str | None = None,
    start_index: int | None = None,
    count: int | None = None,
) -> Any:
    query = _list_query(filter=filter, attributes=attributes, start_index=start_index, count=count)
    data = await IAM.send(auth, IAM.path("Users"), query=query)
    return IAM.require(data, "users")


async def fetch_user(auth: AuthContext, user_id: str) -> Any:
    data = await IAM.send(auth, IAM.path("Users", user_id))
    return IAM.require(data, "user")


async def fetch_current_user(auth: AuthContext) -> Any:
    data = await IAM.send(auth, IAM.path("Users", "me"))
    return IAM.require(data, "current user")


async def create_user(auth: AuthContext, user: Any) -> Any:
    result = await IAM.send_request(auth, IAM.path("Users"), "POST", body=user)
    return created_or_location(result)


async def update_user(auth: AuthContext, user_id: str, user: Any) -> Any:
    result = await IAM.send_request(auth, IAM.path("Users", user_id), "PUT", body=user)
    return created_or_location(result, userId=user_id)


async def delete_user(auth: AuthContext, user_id: str) -> str | None:
    """Delete a user; returns the Location/Link header if the server sent one."""

    result = await IAM.send_request(auth, IAM.path("Users", user_id), "DELETE")
    return result.location()


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


async def fetch_groups(
    auth: AuthContext,
    *,
    filter: str | None = None,
    attributes: str | None = None,
    start_index: int | None = None,
    count: int | None = None,
) -> Any:
    query = _list_query(filter=filter, attributes=attributes, start_index=start_index, count=count)
    data = await IAM.send(auth, IAM.path("Groups"), query=query)
    return IAM.require(data, "groups")


async def fetch_group(auth: AuthContext, group_id: str) -> Any:
    data = await IAM.send(auth, IAM.path("Groups", group_id))
    return IAM.require(data, "group")


async def create_group(auth: AuthContext, group: Any) -> Any:
    result = await IAM.send_request(auth, IAM.path("Groups"), "POST", body=group)
    return created_or_location(result)


async def update_group(auth: AuthContext, group_id: str, group: Any) -> Any:
    result = await IAM.send_request(auth, IAM.path("Groups", group_id), "PUT", body=group)
    return created_or_location(result, groupId=group_id)


async def delete_group(auth: AuthContext, group_id: str) -> str | None:
    result = await IAM.send_request(auth, IAM.path("Groups", group_id), "DELETE")
    return result.location()
