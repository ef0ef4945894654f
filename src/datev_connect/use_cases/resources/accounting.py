"""Accounting resources.

Every operation except ``client.getAll`` is scoped by ``clientId``; everything
below the fiscal year also needs ``fiscalYearId``. List-style reads share the
OData query options (``top`` defaults to 100).

Most resources are plain fiscal-year collections and are declared in
``COLLECTIONS``; the few operations that do not fit that shape (posting
proposal batches, cost sequence creation, record listings) are registered by
hand in ``build_registry``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from datev_connect.common.errors import NodeOperationError
from datev_connect.common.models import AuthContext
from datev_connect.integrations import accounting_client as acc
from datev_connect.use_cases.parameters import ParameterReader
from datev_connect.use_cases.resource_dispatcher import ResourceRegistry

COST_SYSTEM = ("cost-systems", "costSystemId")
POSTING_PROPOSAL_KINDS = {
    "Incoming": "incoming",
    "Outgoing": "outgoing",
    "CashRegister": "cash-register",
}


def _scoped_id(params: ParameterReader, name: str) -> str:
    value = params.optional_string(name)
    if not value:
        raise NodeOperationError(
            f"{name} is required for this operation", item_index=params.item_index
        )
    return value


def _scope(params: ParameterReader) -> tuple[str, str]:
    return _scoped_id(params, "clientId"), _scoped_id(params, "fiscalYearId")


@dataclass(frozen=True, slots=True)
class FiscalYearCollection:
    resource: str
    route: str
    id_parameter: str
    operations: frozenset[str]
    data_parameter: str | None = None
    # Extra read-only sub-collection exposed as its own operation, e.g. "condensed".
    extra: tuple[str, str] | None = None
    # (route, id parameter) of the item this collection hangs below.
    parent: tuple[str, str] | None = None
    # Registered names for the generic operations, when they differ.
    names: tuple[tuple[str, str], ...] = ()

    def operation_name(self, operation: str) -> str:
        return dict(self.names).get(operation, operation)

    def route_for(self, params: ParameterReader) -> str:
        if self.parent is None:
            return self.route
        parent_route, parent_parameter = self.parent
        return acc.nested_route(
            parent_route, params.required_string(parent_parameter), self.route
        )


def _renamed(suffix: str) -> tuple[tuple[str, str], ...]:
    return (
        ("getAll", f"get{suffix}s"),
        ("get", f"get{suffix}"),
        ("create", f"create{suffix}"),
        ("update", f"update{suffix}"),
    )


COLLECTIONS: tuple[FiscalYearCollection, ...] = (
    FiscalYearCollection(
        resource="accountsReceivable",
        route="accounts-receivable",
        id_parameter="accountsReceivableId",
        operations=frozenset({"getAll", "get"}),
        extra=("getCondensed", "condensed"),
    ),
    FiscalYearCollection(
        resource="accountsPayable",
        route="accounts-payable",
        id_parameter="accountsPayableId",
        operations=frozenset({"getAll", "get"}),
        extra=("getCondensed", "condensed"),
    ),
    FiscalYearCollection(
        resource="accountPosting",
        route="account-postings",
        id_parameter="accountPostingId",
        operations=frozenset({"getAll", "get"}),
    ),
    FiscalYearCollection(
        resource="accountingSequence",
        route="accounting-sequences",
        id_parameter="accountingSequenceId",
        operations=frozenset({"getAll", "get", "create"}),
        data_parameter="accountingSequenceData",
    ),
    FiscalYearCollection(
        resource="generalLedgerAccounts",
        route="general-ledger-accounts",
        id_parameter="generalLedgerAccountId",
        operations=frozenset({"getAll", "get"}),
        extra=("getUtilized", "utilized"),
    ),
    FiscalYearCollection(
        resource="termsOfPayment",
        route="terms-of-payment",
        id_parameter="termOfPaymentId",
        operations=frozenset({"getAll", "get", "create", "update"}),
        data_parameter="termOfPaymentData",
    ),
    *(
        FiscalYearCollection(
            resource="postingProposals",
            route=f"posting-proposals/rules/{route}",
            id_parameter="ruleId",
            operations=frozenset({"getAll", "get"}),
            names=(("getAll", f"getRules{kind}"), ("get", f"getRule{kind}")),
        )
        for kind, route in POSTING_PROPOSAL_KINDS.items()
    ),
    FiscalYearCollection(
        resource="accountingSumsAndBalances",
        route="sums-and-balances",
        id_parameter="accountingSumsAndBalancesId",
        operations=frozenset({"getAll", "get"}),
    ),
    FiscalYearCollection(
        resource="businessPartners",
        route="debitors",
        id_parameter="debitorId",
        operations=frozenset({"getAll", "get", "create", "update"}),
        data_parameter="debitorData",
        extra=("getNextAvailableDebitor", "next-available"),
        names=_renamed("Debitor"),
    ),
    FiscalYearCollection(
        resource="businessPartners",
        route="creditors",
        id_parameter="creditorId",
        operations=frozenset({"getAll", "get", "create", "update"}),
        data_parameter="creditorData",
        extra=("getNextAvailableCreditor", "next-available"),
        names=_renamed("Creditor"),
    ),
    FiscalYearCollection(
        resource="stocktakingData",
        route="stocktaking-data",
        id_parameter="assetId",
        operations=frozenset({"getAll", "get", "update"}),
        data_parameter="stocktakingData",
    ),
    FiscalYearCollection(
        resource="costSystems",
        route="cost-systems",
        id_parameter="costSystemId",
        operations=frozenset({"getAll", "get"}),
    ),
    FiscalYearCollection(
        resource="costCentersUnits",
        route="cost-centers",
        id_parameter="costCenterId",
        operations=frozenset({"getAll", "get"}),
        parent=COST_SYSTEM,
    ),
    FiscalYearCollection(
        resource="costCenterProperties",
        route="cost-center-properties",
        id_parameter="costCenterPropertyId",
        operations=frozenset({"getAll", "get"}),
        parent=COST_SYSTEM,
    ),
    FiscalYearCollection(
        resource="internalCostServices",
        route="internal-cost-services",
        id_parameter="internalCostServiceId",
        operations=frozenset({"create"}),
        data_parameter="internalCostServiceData",
        parent=COST_SYSTEM,
    ),
    FiscalYearCollection(
        resource="costSequences",
        route="cost-sequences",
        id_parameter="costSequenceId",
        operations=frozenset({"getAll", "get"}),
        parent=COST_SYSTEM,
    ),
    FiscalYearCollection(
        resource="accountingStatistics",
        route="accounting-statistics",
        id_parameter="accountingStatisticsId",
        operations=frozenset({"getAll"}),
    ),
    FiscalYearCollection(
        resource="accountingTransactionKeys",
        route="accounting-transaction-keys",
        id_parameter="accountingTransactionKeyId",
        operations=frozenset({"getAll", "get"}),
    ),
    FiscalYearCollection(
        resource="variousAddresses",
        route="various-addresses",
        id_parameter="variousAddressId",
        operations=frozenset({"getAll", "get", "create"}),
        data_parameter="variousAddressData",
    ),
)


def _register_collection(reg: ResourceRegistry, c: FiscalYearCollection) -> None:
    if "getAll" in c.operations:

        @reg.register(c.resource, c.operation_name("getAll"))
        async def _get_all(params: ParameterReader, auth: AuthContext) -> Any:
            client_id, fiscal_year_id = _scope(params)
            return await acc.fetch_collection(
                auth, client_id, fiscal_year_id, c.route_for(params), params.odata_query()
            )

    if "get" in c.operations:

        @reg.register(c.resource, c.operation_name("get"))
        async def _get(params: ParameterReader, auth: AuthContext) -> Any:
            client_id, fiscal_year_id = _scope(params)
            route = c.route_for(params)
            item_id = params.required_string(c.id_parameter)
            return await acc.fetch_collection_item(
                auth,
                client_id,
                fiscal_year_id,
                route,
                item_id,
                params.odata_query(paging=False),
            )

    if "create" in c.operations and c.data_parameter:

        @reg.register(c.resource, c.operation_name("create"))
        async def _create(params: ParameterReader, auth: AuthContext) -> Any:
            client_id, fiscal_year_id = _scope(params)
            route = c.route_for(params)
            payload = params.json_object(c.data_parameter)
            return await acc.create_collection_item(
                auth, client_id, fiscal_year_id, route, payload
            )

    if "update" in c.operations and c.data_parameter:

        @reg.register(c.resource, c.operation_name("update"))
        async def _update(params: ParameterReader, auth: AuthContext) -> Any:
            client_id, fiscal_year_id = _scope(params)
            route = c.route_for(params)
            item_id = params.required_string(c.id_parameter)
            payload = params.json_object(c.data_parameter)
            return await acc.update_collection_item(
                auth, client_id, fiscal_year_id, route, item_id, payload
            )

    if c.extra is not None:
        operation, segment = c.extra

        @reg.register(c.resource, operation)
        async def _extra(params: ParameterReader, auth: AuthContext) -> Any:
            client_id, fiscal_year_id = _scope(params)
            return await acc.fetch_collection_item(
                auth, client_id, fiscal_year_id, c.route_for(params), segment, params.odata_query()
            )


def _register_posting_proposal_batch(reg: ResourceRegistry, kind: str, route: str) -> None:
    @reg.register("postingProposals", f"batch{kind}")
    async def _batch(params: ParameterReader, auth: AuthContext) -> Any:
        client_id, fiscal_year_id = _scope(params)
        return await acc.create_collection_item(
            auth,
            client_id,
            fiscal_year_id,
            f"posting-proposals/{route}/batch",
            params.json("batchData"),
        )


def build_registry() -> ResourceRegistry:
    reg = ResourceRegistry("accounting")

    @reg.register("client", "getAll")
    async def _clients(params: ParameterReader, auth: AuthContext) -> Any:
        return await acc.fetch_clients(auth, params.odata_query())

    @reg.register("client", "get")
    async def _client(params: ParameterReader, auth: AuthContext) -> Any:
        client_id = _scoped_id(params, "clientId")
        return await acc.fetch_client(auth, client_id, params.odata_query(paging=False))

    @reg.register("fiscalYear", "getAll")
    async def _fiscal_years(params: ParameterReader, auth: AuthContext) -> Any:
        return await acc.fetch_fiscal_years(
            auth, _scoped_id(params, "clientId"), params.odata_query()
        )

    @reg.register("fiscalYear", "get")
    async def _fiscal_year(params: ParameterReader, auth: AuthContext) -> Any:
        client_id, fiscal_year_id = _scope(params)
        return await acc.fetch_fiscal_year(
            auth, client_id, fiscal_year_id, params.odata_query(paging=False)
        )

    for collection in COLLECTIONS:
        _register_collection(reg, collection)

    @reg.register("accountingSequence", "getAccountingRecords")
    async def _accounting_records(params: ParameterReader, auth: AuthContext) -> Any:
        client_id, fiscal_year_id = _scope(params)
        return await acc.fetch_accounting_records(
            auth,
            client_id,
            fiscal_year_id,
            params.required_string("accountingSequenceId"),
            params.odata_query(),
        )

    @reg.register("accountingSequence", "getAccountingRecord")
    async def _accounting_record(params: ParameterReader, auth: AuthContext) -> Any:
        client_id, fiscal_year_id = _scope(params)
        return await acc.fetch_accounting_record(
            auth,
            client_id,
            fiscal_year_id,
            params.required_string("accountingSequenceId"),
            params.required_string("accountingRecordId"),
            params.odata_query(paging=False),
        )

    for kind, route in POSTING_PROPOSAL_KINDS.items():
        _register_posting_proposal_batch(reg, kind, route)

    @reg.register("costSequences", "create")
    async def _create_cost_sequence(params: ParameterReader, auth: AuthContext) -> Any:
        client_id, fiscal_year_id = _scope(params)
        return await acc.create_cost_sequence(
            auth,
            client_id,
            fiscal_year_id,
            params.required_string("costSystemId"),
            params.required_string("costSequenceId"),
            params.json_object("costSequenceData"),
        )

    @reg.register("costSequences", "getCostAccountingRecords")
    async def _cost_accounting_records(params: ParameterReader, auth: AuthContext) -> Any:
        client_id, fiscal_year_id = _scope(params)
        return await acc.fetch_cost_accounting_records(
            auth,
            client_id,
            fiscal_year_id,
            params.required_string("costSystemId"),
            params.required_string("costSequenceId"),
            params.odata_query(),
        )

    return reg
