from __future__ import annotations

import asyncio
import json

import pytest

from datev_connect.common.errors import DatevRequestError
from datev_connect.integrations import accounting_client as acc
from datev_connect.integrations import document_management_client as dms
from datev_connect.integrations import identity_client as iam
from datev_connect.integrations import order_management_client as om
from datev_connect.integrations.http_response import HttpResponse

BASE = "https://datev.example.com"


# ---------------------------------------------------------------------------
# DMS
# ---------------------------------------------------------------------------


def test_dms_document_list_omits_zero_paging(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp([{"id": "doc-1"}]))

    data = asyncio.run(
        dms.fetch_documents(make_auth(fetch), filter="number eq 12345", top=10, skip=0)
    )

    assert data == [{"id": "doc-1"}]
    assert fetch.last["url"] == f"{BASE}/datev/api/dms/v2/documents?filter=number+eq+12345&top=10"
    assert fetch.last["headers"]["X-DATEV-Client-Instance-Id"] == "tenant-1"


def test_dms_create_document_falls_back_to_location(make_fetch, make_auth) -> None:
    fetch = make_fetch(
        HttpResponse(None, status=201, status_text="Created", headers={"Location": "/documents/new-doc-123"})
    )

    data = asyncio.run(dms.create_document(make_auth(fetch), {"description": "Invoice"}))

    assert data == {"success": True, "location": "/documents/new-doc-123"}
    assert fetch.last["method"] == "POST"
    assert json.loads(fetch.last["body"]) == {"description": "Invoice"}


def test_dms_update_without_body_reports_document_id(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(None, status=204))

    data = asyncio.run(dms.update_document(make_auth(fetch), "doc-7", {"x": 1}))

    assert data == {"success": True, "documentId": "doc-7"}
    assert fetch.last["method"] == "PUT"
    assert fetch.last["url"] == f"{BASE}/datev/api/dms/v2/documents/doc-7"


def test_dms_delete_permanently_path(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(None, status=204))

    asyncio.run(dms.delete_document_permanently(make_auth(fetch), "doc 1"))

    assert fetch.last["method"] == "DELETE"
    assert fetch.last["url"] == f"{BASE}/datev/api/dms/v2/documents/doc%201/delete-permanently"


def test_dms_individual_references(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp([]))

    asyncio.run(dms.fetch_individual_references(make_auth(fetch), 2, top=5))

    assert fetch.last["url"] == f"{BASE}/datev/api/dms/v2/individual-references2?top=5"
    with pytest.raises(ValueError):
        asyncio.run(dms.fetch_individual_references(make_auth(fetch), 3))


def test_dms_error_prefix(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp({"detail": "no access"}, status=403, status_text="Forbidden"))

    with pytest.raises(DatevRequestError, match=r"^DATEV DMS request failed \(403 Forbidden\): no access$"):
        asyncio.run(dms.fetch_info(make_auth(fetch)))


# ---------------------------------------------------------------------------
# IAM
# ---------------------------------------------------------------------------


def test_iam_users_query(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp({"Resources": []}))

    asyncio.run(
        iam.fetch_users(make_auth(fetch), filter='userName eq "a"', start_index=1, count=100)
    )

    assert fetch.last["url"] == (
        f"{BASE}/datevconnect/iam/v1/Users?filter=userName+eq+%22a%22&startIndex=1&count=100"
    )
    assert fetch.last["headers"]["x-client-instance-id"] == "tenant-1"


def test_iam_current_user_requires_body(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(None, status=204))

    with pytest.raises(DatevRequestError, match="DATEV IAM request failed: Expected current user response."):
        asyncio.run(iam.fetch_current_user(make_auth(fetch)))
    assert fetch.last["url"] == f"{BASE}/datevconnect/iam/v1/Users/me"


def test_iam_delete_returns_location(make_fetch, make_auth) -> None:
    fetch = make_fetch(
        HttpResponse(None, status=204, headers={"Link": "/Users"}),
        HttpResponse(None, status=204),
    )
    auth = make_auth(fetch)

    assert asyncio.run(iam.delete_user(auth, "u-1")) == "/Users"
    assert asyncio.run(iam.delete_group(auth, "g-1")) is None
    assert fetch.calls[1]["url"] == f"{BASE}/datevconnect/iam/v1/Groups/g-1"


def test_iam_update_user_without_body(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(None, status=204, headers={"Location": "/Users/u-1"}))

    data = asyncio.run(iam.update_user(make_auth(fetch), "u-1", {"active": False}))

    assert data == {"success": True, "userId": "u-1", "location": "/Users/u-1"}


# ---------------------------------------------------------------------------
# Order management
# ---------------------------------------------------------------------------


def test_order_list_query_order(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp([]))

    asyncio.run(
        om.fetch_orders(make_auth(fetch), filter="year eq 2024", cost_rate=2, top=50, expand="suborders")
    )

    assert fetch.last["url"] == (
        f"{BASE}/datev/api/order-management/v1/orders"
        "?filter=year+eq+2024&costrate=2&top=50&expand=suborders"
    )


def test_order_nested_paths(make_fetch, make_auth) -> None:
    fetch = make_fetch()
    auth = make_auth(fetch)

    asyncio.run(om.fetch_orders_monthly_values(auth, top=10))
    asyncio.run(om.fetch_order_cost_items(auth, 42, select="id"))
    asyncio.run(om.create_expense_posting(auth, 42, 3, {"amount": 1}, automatic_integration=True))
    asyncio.run(om.fetch_client_group(auth, "c-9"))

    urls = [c["url"] for c in fetch.calls]
    prefix = f"{BASE}/datev/api/order-management/v1"
    assert urls == [
        f"{prefix}/orders/monthlyvalues?top=10",
        f"{prefix}/orders/42/costitems?select=id",
        f"{prefix}/orders/42/suborders/3/expensepostings?automaticintegration=true",
        f"{prefix}/clientgroup?clientid=c-9",
    ]
    assert fetch.calls[2]["method"] == "POST"


# ---------------------------------------------------------------------------
# Accounting
# ---------------------------------------------------------------------------


def test_accounting_fiscal_year_scoped_paths(make_fetch, make_auth) -> None:
    fetch = make_fetch(
        HttpResponse(None, status=201, headers={"Location": "/accounting-sequences/s1"}),
    )
    auth = make_auth(fetch)

    created = asyncio.run(
        acc.create_collection_item(auth, "c1", "20240101", "accounting-sequences", {"x": 1})
    )
    asyncio.run(acc.fetch_collection(auth, "c1", "20240101", "accounts-receivable", {"top": 100}))
    asyncio.run(acc.fetch_accounting_record(auth, "c1", "20240101", "s1", "r1"))

    assert created == {"success": True, "location": "/accounting-sequences/s1"}
    prefix = f"{BASE}/datevconnect/accounting/v1/clients/c1/fiscal-years/20240101"
    assert [c["url"] for c in fetch.calls] == [
        f"{prefix}/accounting-sequences",
        f"{prefix}/accounts-receivable?top=100",
        f"{prefix}/accounting-sequences/s1/accounting-records/r1",
    ]
