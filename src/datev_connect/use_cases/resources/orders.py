"""Order Management resources.

List operations read ``select``, ``filter``, ``top`` (default 100) and ``skip``
(default 0); a value of 0 leaves the option out of the request.
"""

from __future__ import annotations

from typing import Any

from datev_connect.common.errors import NodeOperationError
from datev_connect.common.models import AuthContext
from datev_connect.integrations import order_management_client as om
from datev_connect.use_cases.parameters import ParameterReader
from datev_connect.use_cases.resource_dispatcher import ResourceRegistry


def _paging(params: ParameterReader) -> dict[str, Any]:
    return {
        "top": params.number("top", 100) or None,
        "skip": params.number("skip", 0) or None,
    }


def _list_query(params: ParameterReader) -> dict[str, Any]:
    return {
        "select": params.optional_string("select"),
        "filter": params.optional_string("filter"),
        **_paging(params),
    }


def ensure_cost_rate_expands_suborders(
    params: ParameterReader, cost_rate: Any, expand: str | None
) -> None:
    if cost_rate is None:
        return
    parts = [p.strip().lower() for p in (expand or "").split(",") if p.strip()]
    if "suborders" in parts:
        return
    raise NodeOperationError(
        'When using "Cost Rate" for orders, you must also expand "suborders" '
        "(expand=suborders) or use the monthly values operations.",
        item_index=params.item_index,
    )


def _register_simple_lists(reg: ResourceRegistry) -> None:
    simple = {
        ("invoice", "getAll"): om.fetch_invoices,
        ("employee", "getCapacities"): om.fetch_employee_capacities,
        ("employee", "getWithGroup"): om.fetch_employees_with_group,
        ("employee", "getQualifications"): om.fetch_employee_qualifications,
        ("employee", "getCostRates"): om.fetch_employee_cost_rates,
        ("employee", "getChargeRates"): om.fetch_charge_rates,
        ("fee", "getFees"): om.fetch_fees,
        ("fee", "getFeePlans"): om.fetch_fee_plans,
        ("costCenter", "getAll"): om.fetch_cost_centers,
        ("order", "getCostItemsAll"): om.fetch_orders_cost_items,
        ("order", "getStateWorkAll"): om.fetch_orders_state_work,
        ("order", "getSubordersStateBillingAll"): om.fetch_suborders_state_billing_all,
        ("order", "getExpensePostingsAll"): om.fetch_expense_postings,
    }

    for (resource, operation), fetch in simple.items():

        def _make(fetch=fetch):
            async def _handler(params: ParameterReader, auth: AuthContext) -> Any:
                return await fetch(auth, **_list_query(params))

            return _handler

        reg.register(resource, operation)(_make())


def build_registry() -> ResourceRegistry:
    reg = ResourceRegistry("orderManagement")

    @reg.register("orderType", "getAll")
    async def _order_types(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_order_types(auth, **_paging(params))

    @reg.register("clientGroup", "get")
    async def _client_group(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_client_group(auth, params.required_string("clientId"))

    @reg.register("selfClient", "getAll")
    async def _self_clients(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_self_clients(
            auth, select=params.optional_string("select"), **_paging(params)
        )

    @reg.register("invoice", "get")
    async def _invoice(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_invoice(auth, params.required_number("invoiceId"))

    # --- orders ---

    @reg.register("order", "getAll")
    async def _orders(params: ParameterReader, auth: AuthContext) -> Any:
        cost_rate = params.cost_rate()
        expand = params.optional_string("expand")
        ensure_cost_rate_expands_suborders(params, cost_rate, expand)
        return await om.fetch_orders(
            auth, cost_rate=cost_rate, expand=expand, **_list_query(params)
        )

    @reg.register("order", "get")
    async def _order(params: ParameterReader, auth: AuthContext) -> Any:
        order_id = params.required_number("orderId")
        cost_rate = params.cost_rate()
        expand = params.optional_string("expand")
        ensure_cost_rate_expands_suborders(params, cost_rate, expand)
        return await om.fetch_order(
            auth,
            order_id,
            select=params.optional_string("select"),
            cost_rate=cost_rate,
            expand=expand,
        )

    @reg.register("order", "update")
    async def _update_order(params: ParameterReader, auth: AuthContext) -> Any:
        order_id = params.required_number("orderId")
        response = await om.update_order(auth, order_id, params.json_object("orderData"))
        return response if response is not None else {"success": True, "orderId": order_id}

    @reg.register("order", "getMonthlyValuesForOrder")
    async def _order_monthly_values(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_order_monthly_values(
            auth,
            params.required_number("orderId"),
            select=params.optional_string("select"),
            cost_rate=params.cost_rate(),
        )

    @reg.register("order", "getMonthlyValuesAll")
    async def _orders_monthly_values(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_orders_monthly_values(
            auth, cost_rate=params.cost_rate(), **_list_query(params)
        )

    @reg.register("order", "getCostItemsForOrder")
    async def _order_cost_items(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_order_cost_items(
            auth, params.required_number("orderId"), select=params.optional_string("select")
        )

    @reg.register("order", "getStateWork")
    async def _order_state_work(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_order_state_work(
            auth, params.required_number("orderId"), select=params.optional_string("select")
        )

    @reg.register("order", "getSubordersStateBilling")
    async def _suborders_state_billing(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_suborders_state_billing(
            auth, params.required_number("orderId"), select=params.optional_string("select")
        )

    @reg.register("order", "getExpensePostingsForOrder")
    async def _order_expense_postings(params: ParameterReader, auth: AuthContext) -> Any:
        return await om.fetch_order_expense_postings(
            auth, params.required_number("orderId"), select=params.optional_string("select")
        )

    @reg.register("order", "updateSuborder")
    async def _update_suborder(params: ParameterReader, auth: AuthContext) -> Any:
        order_id = params.required_number("orderId")
        suborder_id = params.required_number("suborderId")
        payload = params.json_object("suborderData")
        response = await om.update_suborder(auth, order_id, suborder_id, payload)
        if response is not None:
            return response
        return {"success": True, "orderId": order_id, "suborderId": suborder_id}

    @reg.register("order", "createExpensePosting")
    async def _create_expense_posting(params: ParameterReader, auth: AuthContext) -> Any:
        order_id = params.required_number("orderId")
        suborder_id = params.required_number("suborderId")
        response = await om.create_expense_posting(
            auth,
            order_id,
            suborder_id,
            params.json_object("expensePostingData"),
            automatic_integration=params.boolean("automaticIntegration"),
            delete_massdata_on_failure=params.boolean("deleteMassdataOnFailure"),
        )
        if response is not None:
            return response
        return {"success": True, "orderId": order_id, "suborderId": suborder_id}

    _register_simple_lists(reg)

    return reg
