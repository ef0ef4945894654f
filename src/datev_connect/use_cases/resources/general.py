"""General DATEVconnect resources (client listing)."""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations.datev_http import fetch_clients
from datev_connect.use_cases.parameters import ParameterReader
from datev_connect.use_cases.resource_dispatcher import ResourceRegistry


def build_registry() -> ResourceRegistry:
    reg = ResourceRegistry("datevConnect")

    @reg.register("client", "getAll")
    async def _clients(params: ParameterReader, auth: AuthContext) -> Any:
        top = params.raw("top", None)
        skip = params.raw("skip", None)
        return await fetch_clients(
            auth,
            top=top if isinstance(top, int) and not isinstance(top, bool) else None,
            skip=skip if isinstance(skip, int) and not isinstance(skip, bool) else None,
        )

    return reg
