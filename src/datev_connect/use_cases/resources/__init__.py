"""Per-domain resource registries.

Each module exposes ``build_registry()``; ``get_registry`` caches one instance
per domain name.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from datev_connect.use_cases.resource_dispatcher import ResourceRegistry
from datev_connect.use_cases.resources import (
    accounting,
    documents,
    general,
    identity,
    master_data,
    orders,
)

REGISTRY_BUILDERS: dict[str, Callable[[], ResourceRegistry]] = {
    "datevConnect": general.build_registry,
    "identity": identity.build_registry,
    "documentManagement": documents.build_registry,
    "orderManagement": orders.build_registry,
    "accounting": accounting.build_registry,
    "masterData": master_data.build_registry,
}


@lru_cache(maxsize=None)
def get_registry(domain: str) -> ResourceRegistry:
    try:
        builder = REGISTRY_BUILDERS[domain]
    except KeyError:
        raise ValueError(
            f"Unknown DATEVconnect domain: {domain!r}. Known: {sorted(REGISTRY_BUILDERS)}"
        ) from None
    return builder()
