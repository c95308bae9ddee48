"""
BizTime Backend — /invoices Endpoint Tests
===========================================

What:  End-to-end tests of the invoice routes, including amount validation,
       the nested company lookup, and paid_date transitions.
"""

from datetime import date

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def company(test_client):
    response = await test_client.post(
        "/companies",
        json={"code": "apple", "name": "Apple Computer", "description": "Maker of OSX."},
    )
    return response.json()["company"]


async def _create_invoice(client, comp_code="apple", amt=100):
    response = await client.post("/invoices", json={"comp_code": comp_code, "amt": amt})
    assert response.status_code == 201
    return response.json()["invoice"]


class TestInvoiceList:

    @pytest.mark.asyncio
    async def test_list(self, test_client, company):
        first = await _create_invoice(test_client)
        second = await _create_invoice(test_client, amt=200)

        response = await test_client.get("/invoices")

        assert response.status_code == 200
        assert response.json() == {
            "invoices": [
                {"id": first["id"], "comp_code": "apple"},
                {"id": second["id"], "comp_code": "apple"},
            ]
        }


class TestInvoiceCreate:

    @pytest.mark.asyncio
    async def test_create(self, test_client, company):
        invoice = await _create_invoice(test_client, amt=100)

        assert invoice["comp_code"] == "apple"
        assert invoice["amt"] == 100
        assert invoice["paid"] is False
        assert invoice["add_date"] == date.today().isoformat()
        assert invoice["paid_date"] is None

    @pytest.mark.asyncio
    async def test_create_zero_amount(self, test_client, company):
        invoice = await _create_invoice(test_client, amt=0)

        assert invoice["amt"] == 0

    @pytest.mark.asyncio
    async def test_create_numeric_string_amount(self, test_client, company):
        invoice = await _create_invoice(test_client, amt="12.5")

        assert invoice["amt"] == 12.5

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"comp_code": "apple", "amt": -5},
            {"comp_code": "apple", "amt": "abc"},
            {"comp_code": "apple", "amt": True},
            {"comp_code": "apple"},
            {"amt": 100},
            {"comp_code": "", "amt": 100},
        ],
    )
    async def test_create_invalid(self, test_client, company, body):
        response = await test_client.post("/invoices", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_create_without_body(self, test_client):
        response = await test_client.post("/invoices")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_for_unknown_company(self, test_client):
        response = await test_client.post("/invoices", json={"comp_code": "nope", "amt": 10})

        assert response.status_code == 500
        assert (await test_client.get("/invoices")).json() == {"invoices": []}


class TestInvoiceGet:

    @pytest.mark.asyncio
    async def test_get_nests_company(self, test_client, company):
        created = await _create_invoice(test_client)

        response = await test_client.get(f"/invoices/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "invoice": {
                "id": created["id"],
                "amt": 100,
                "paid": False,
                "add_date": created["add_date"],
                "paid_date": None,
                "company": company,
            }
        }

    @pytest.mark.asyncio
    async def test_company_code_matches_comp_code(self, test_client, company):
        await test_client.post("/companies", json={"code": "ibm", "name": "IBM"})
        created = await _create_invoice(test_client, comp_code="ibm")

        invoice = (await test_client.get(f"/invoices/{created['id']}")).json()["invoice"]

        assert invoice["company"]["code"] == created["comp_code"] == "ibm"

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, test_client):
        response = await test_client.get("/invoices/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestInvoiceUpdate:

    @pytest.mark.asyncio
    async def test_update_amount(self, test_client, company):
        created = await _create_invoice(test_client)

        response = await test_client.put(f"/invoices/{created['id']}", json={"amt": 500})

        assert response.status_code == 200
        invoice = response.json()["invoice"]
        assert invoice["amt"] == 500
        assert invoice["comp_code"] == "apple"
        assert invoice["paid"] is False

    @pytest.mark.asyncio
    async def test_pay_then_unpay(self, test_client, company):
        created = await _create_invoice(test_client)

        paid = (await test_client.put(
            f"/invoices/{created['id']}", json={"amt": 100, "paid": True}
        )).json()["invoice"]
        assert paid["paid"] is True
        assert paid["paid_date"] == date.today().isoformat()

        unpaid = (await test_client.put(
            f"/invoices/{created['id']}", json={"amt": 100, "paid": False}
        )).json()["invoice"]
        assert unpaid["paid"] is False
        assert unpaid["paid_date"] is None

    @pytest.mark.asyncio
    async def test_update_missing_invoice_creates_nothing(self, test_client, company):
        response = await test_client.put("/invoices/999", json={"amt": 10})

        assert response.status_code == 404
        assert (await test_client.get("/invoices")).json() == {"invoices": []}

    @pytest.mark.asyncio
    async def test_update_without_body(self, test_client, company):
        created = await _create_invoice(test_client)

        response = await test_client.put(f"/invoices/{created['id']}")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_negative_amount(self, test_client, company):
        created = await _create_invoice(test_client)

        response = await test_client.put(f"/invoices/{created['id']}", json={"amt": -1})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_boolean_amount(self, test_client, company):
        created = await _create_invoice(test_client)

        response = await test_client.put(f"/invoices/{created['id']}", json={"amt": True})

        assert response.status_code == 400
        assert (await test_client.get(f"/invoices/{created['id']}")).json()["invoice"]["amt"] == 100


class TestInvoiceDelete:

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, company):
        created = await _create_invoice(test_client)

        first = await test_client.delete(f"/invoices/{created['id']}")
        second = await test_client.delete(f"/invoices/{created['id']}")

        assert first.json() == {"status": "Deleted"}
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_round_trip(self, test_client, company):
        created = await _create_invoice(test_client, amt=10)
        path = f"/invoices/{created['id']}"

        assert (await test_client.get(path)).json()["invoice"]["amt"] == 10
        await test_client.put(path, json={"amt": 20})
        assert (await test_client.get(path)).json()["invoice"]["amt"] == 20

        assert (await test_client.delete(path)).status_code == 200
        assert (await test_client.get(path)).status_code == 404

        company_detail = (await test_client.get("/companies/apple")).json()["company"]
        assert company_detail["invoices"] == []


class TestInvoiceIdRange:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("invoice_id", ["0", "2147483648", "99999999999999999999"])
    async def test_get_out_of_range_id(self, test_client, invoice_id):
        response = await test_client.get(f"/invoices/{invoice_id}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("invoice_id", ["0", "2147483648", "99999999999999999999"])
    async def test_delete_out_of_range_id(self, test_client, invoice_id):
        response = await test_client.delete(f"/invoices/{invoice_id}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_out_of_range_id(self, test_client, company):
        response = await test_client.put("/invoices/99999999999999999999", json={"amt": 5})

        assert response.status_code == 404
        assert (await test_client.get("/invoices")).json() == {"invoices": []}
