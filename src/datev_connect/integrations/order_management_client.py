"""DATEV Order Management (v1) endpoints.

Purpose
- One function per endpoint, named after the API resource it reads or writes.
- Order and suborder ids are numeric; they are percent-encoded into the path.
"""

from __future__ import annotations

from typing import Any

from datev_connect.common.models import AuthContext
from datev_connect.integrations.datev_http import DomainSender

ORDER_MANAGEMENT = DomainSender(
    error_prefix="DATEV Order Management request failed",
    base_path="datev/api/order-management/v1",
)

_OM = ORDER_MANAGEMENT


async def _list(
    auth: AuthContext,
    *route: Any,
    select: str | None = None,
    filter: str | None = None,
    top: int | None = None,
    skip: int | None = None,
) -> Any:
    query = {"select": select, "filter": filter, "top": top, "skip": skip}
    return await _OM.send(auth, _OM.path(*route), query=query)


async def fetch_order_types(
    auth: AuthContext, *, top: int | None = None, skip: int | None = None
) -> Any:
    return await _OM.send(auth, _OM.path("ordertypes"), query={"top": top, "skip": skip})


async def fetch_client_group(auth: AuthContext, client_id: str) -> Any:
    return await _OM.send(auth, _OM.path("clientgroup"), query={"clientid": client_id})


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


async def fetch_orders(
    auth: AuthContext,
    *,
    select: str | None = None,
    filter: str | None = None,
    cost_rate: int | None = None,
    top: int | None = None,
    skip: int | None = None,
    expand: str | None = None,
) -> Any:
    query = {
        "select": select,
        "filter": filter,
        "costrate": cost_rate,
        "top": top,
        "skip": skip,
        "expand": expand,
    }
    return await _OM.send(auth, _OM.path("orders"), query=query)


async def fetch_order(
    auth: AuthContext,
    order_id: int,
    *,
    select: str | None = None,
    cost_rate: int | None = None,
    expand: str | None = None,
) -> Any:
    query = {"select": select, "costrate": cost_rate, "expand": expand}
    return await _OM.send(auth, _OM.path("orders", order_id), query=query)


async def update_order(auth: AuthContext, order_id: int, order: Any) -> Any:
    return await _OM.send(auth, _OM.path("orders", order_id), "PUT", body=order)


async def fetch_order_monthly_values(
    auth: AuthContext,
    order_id: int,
    *,
    select: str | None = None,
    cost_rate: int | None = None,
) -> Any:
    query = {"select": select, "costrate": cost_rate}
    return await _OM.send(auth, _OM.path("orders", order_id, "monthlyvalues"), query=query)


async def fetch_orders_monthly_values(
    auth: AuthContext,
    *,
    select: str | None = None,
    filter: str | None = None,
    cost_rate: int | None = None,
    top: int | None = None,
    skip: int | None = None,
) -> Any:
    query = {
        "select": select,
        "filter": filter,
        "costrate": cost_rate,
        "top": top,
        "skip": skip,
    }
    return await _OM.send(auth, _OM.path("orders/monthlyvalues"), query=query)


async def fetch_order_cost_items(auth: AuthContext, order_id: int, *, select: str | None = None) -> Any:
    return await _OM.send(auth, _OM.path("orders", order_id, "costitems"), query={"select": select})


async def fetch_orders_cost_items(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "orders/costitems", **query)


async def fetch_order_state_work(auth: AuthContext, order_id: int, *, select: str | None = None) -> Any:
    return await _OM.send(
        auth, _OM.path("orders", order_id, "orderstatework"), query={"select": select}
    )


async def fetch_orders_state_work(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "orders/orderstatework", **query)


async def fetch_suborders_state_billing(
    auth: AuthContext, order_id: int, *, select: str | None = None
) -> Any:
    return await _OM.send(
        auth, _OM.path("orders", order_id, "subordersstatebilling"), query={"select": select}
    )


async def fetch_suborders_state_billing_all(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "orders/subordersstatebilling", **query)


async def update_suborder(auth: AuthContext, order_id: int, suborder_id: int, suborder: Any) -> Any:
    return await _OM.send(
        auth, _OM.path("orders", order_id, "suborders", suborder_id), "PUT", body=suborder
    )


async def fetch_order_expense_postings(
    auth: AuthContext, order_id: int, *, select: str | None = None
) -> Any:
    return await _OM.send(
        auth, _OM.path("orders", order_id, "expensepostings"), query={"select": select}
    )


async def fetch_expense_postings(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "orders/expensepostings", **query)


async def create_expense_posting(
    auth: AuthContext,
    order_id: int,
    suborder_id: int,
    expense_posting: Any,
    *,
    automatic_integration: bool | None = None,
    delete_massdata_on_failure: bool | None = None,
) -> Any:
    query = {
        "automaticintegration": automatic_integration,
        "deletemassdataonfailure": delete_massdata_on_failure,
    }
    return await _OM.send(
        auth,
        _OM.path("orders", order_id, "suborders", suborder_id, "expensepostings"),
        "POST",
        query=query,
        body=expense_posting,
    )


# ---------------------------------------------------------------------------
# Invoices, employees, fees and master lists
# ---------------------------------------------------------------------------


async def fetch_invoices(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "invoices", **query)


async def fetch_invoice(auth: AuthContext, invoice_id: int) -> Any:
    return await _OM.send(auth, _OM.path("invoices", invoice_id))


async def fetch_employee_capacities(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "employeecapacities", **query)


async def fetch_employees_with_group(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "employeeswithgroup", **query)


async def fetch_employee_qualifications(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "employeesqualification", **query)


async def fetch_employee_cost_rates(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "employeescostrate", **query)


async def fetch_charge_rates(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "chargerates", **query)


async def fetch_cost_centers(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "costcenters", **query)


async def fetch_fees(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "fees", **query)


async def fetch_fee_plans(auth: AuthContext, **query: Any) -> Any:
    return await _list(auth, "feeplans", **query)


async def fetch_self_clients(
    auth: AuthContext,
    *,
    select: str | None = None,
    top: int | None = None,
    skip: int | None = None,
) -> Any:
    return await _list(auth, "selfclients", select=select, top=top, skip=skip)
