"""End-to-end tests for the resource endpoints."""

import pytest


@pytest.fixture
def headers(register):
    return register()


@pytest.fixture
def refs(client, headers):
    """Create an account, a counterparty and a category over HTTP."""
    account = client.post(
        "/api/accounts", json={"description": "Checking", "bankName": "First Bank"}, headers=headers
    ).json()
    savings = client.post(
        "/api/accounts", json={"description": "Savings", "bankName": "First Bank"}, headers=headers
    ).json()
    tiers = client.post("/api/tiers", json={"name": "Grocer"}, headers=headers).json()
    category = client.post("/api/categories", json={"name": "Food"}, headers=headers).json()
    return {
        "account": account["id"],
        "savings": savings["id"],
        "tiers": tiers["id"],
        "category": category["id"],
    }


class TestAccounts:
    """Tests for /api/accounts."""

    def test_empty_list_is_204(self, client, headers):
        response = client.get("/api/accounts", headers=headers)
        assert response.status_code == 204
        assert response.content == b""

    def test_create_and_list(self, client, headers):
        response = client.post(
            "/api/accounts", json={"description": "Checking", "bankName": "First Bank"}, headers=headers
        )
        assert response.status_code == 201
        assert response.json()["bankName"] == "First Bank"

        listed = client.get("/api/accounts", headers=headers)
        assert listed.status_code == 200
        assert [a["description"] for a in listed.json()] == ["Checking"]

    def test_create_missing_fields(self, client, headers):
        response = client.post("/api/accounts", json={}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_FIELDS"

    def test_other_users_account_is_forbidden(self, client, headers, register, refs):
        bob = register("bob", "bob-password")

        response = client.get(f"/api/accounts/{refs['account']}", headers=bob)

        assert response.status_code == 403
        body = response.json()
        assert body["error"]["code"] == "FORBIDDEN"
        assert "Checking" not in response.text
        assert set(body) == {"error"}

    def test_unknown_account_is_404(self, client, headers):
        response = client.get("/api/accounts/999", headers=headers)
        assert response.status_code == 404

    def test_patch_without_fields_is_400(self, client, headers, refs):
        response = client.patch(f"/api/accounts/{refs['account']}", json={}, headers=headers)
        assert response.status_code == 400

    def test_patch_same_values_is_304(self, client, headers, refs):
        response = client.patch(
            f"/api/accounts/{refs['account']}", json={"description": "Checking"}, headers=headers
        )

        assert response.status_code == 304
        assert response.content == b""

    def test_patch_updates(self, client, headers, refs):
        response = client.patch(
            f"/api/accounts/{refs['account']}", json={"bankName": "Other Bank"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["bankName"] == "Other Bank"
        assert response.json()["description"] == "Checking"

    def test_delete_in_use_is_409(self, client, headers, refs):
        client.post(
            "/api/movements",
            json={
                "date": "2024-02-01",
                "accountId": refs["account"],
                "counterpartyId": refs["tiers"],
                "categoryId": refs["category"],
                "amount": -10,
                "type": "D",
            },
            headers=headers,
        )

        response = client.delete(f"/api/accounts/{refs['account']}", headers=headers)

        assert response.status_code == 409
        assert client.get(f"/api/accounts/{refs['account']}", headers=headers).status_code == 200

    def test_delete(self, client, headers, refs):
        response = client.delete(f"/api/accounts/{refs['savings']}", headers=headers)

        assert response.status_code == 204
        assert client.get(f"/api/accounts/{refs['savings']}", headers=headers).status_code == 404


class TestCategories:
    """Tests for /api/categories and /api/subcategories."""

    def test_requires_auth(self, client):
        assert client.get("/api/categories").status_code == 401

    def test_duplicate_name_is_409(self, client, headers):
        client.post("/api/categories", json={"name": "Food"}, headers=headers)
        response = client.post("/api/categories", json={"name": "Food"}, headers=headers)
        assert response.status_code == 409

    def test_put_same_name_is_304(self, client, headers, refs):
        response = client.put(
            f"/api/categories/{refs['category']}", json={"name": "Food"}, headers=headers
        )
        assert response.status_code == 304

    def test_put_renames(self, client, headers, refs):
        response = client.put(
            f"/api/categories/{refs['category']}", json={"name": "Meals"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Meals"

    def test_sub_category_filter(self, client, headers, refs):
        other = client.post("/api/categories", json={"name": "Housing"}, headers=headers).json()
        client.post(
            "/api/subcategories",
            json={"name": "Groceries", "categoryId": refs["category"]},
            headers=headers,
        )
        client.post("/api/subcategories", json={"name": "Rent", "categoryId": other["id"]}, headers=headers)

        response = client.get(
            "/api/subcategories", params={"categoryId": refs["category"]}, headers=headers
        )

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Groceries"]

    def test_delete_category_with_sub_categories_is_409(self, client, headers, refs):
        client.post(
            "/api/subcategories",
            json={"name": "Groceries", "categoryId": refs["category"]},
            headers=headers,
        )

        response = client.delete(f"/api/categories/{refs['category']}", headers=headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "IN_USE"


class TestTiers:
    """Tests for /api/tiers."""

    def test_other_users_counterparty_is_forbidden(self, client, refs, register):
        bob = register("bob", "bob-password")
        response = client.get(f"/api/tiers/{refs['tiers']}", headers=bob)
        assert response.status_code == 403

    def test_delete_in_use_is_409(self, client, headers, refs):
        client.post(
            "/api/movements",
            json={
                "date": "2024-02-01",
                "accountId": refs["account"],
                "counterpartyId": refs["tiers"],
                "categoryId": refs["category"],
                "amount": -10,
                "type": "D",
            },
            headers=headers,
        )

        response = client.delete(f"/api/tiers/{refs['tiers']}", headers=headers)

        assert response.status_code == 409
        assert client.get(f"/api/tiers/{refs['tiers']}", headers=headers).status_code == 200


class TestMovements:
    """Tests for /api/movements."""

    def _payload(self, refs, **overrides):
        payload = {
            "date": "2024-02-01",
            "accountId": refs["account"],
            "counterpartyId": refs["tiers"],
            "categoryId": refs["category"],
            "amount": -50,
            "type": "D",
        }
        payload.update(overrides)
        return payload

    def test_create(self, client, headers, refs):
        response = client.post("/api/movements", json=self._payload(refs), headers=headers)

        assert response.status_code == 201
        body = response.json()
        assert body["amount"] == -50.0
        assert body["type"] == "D"
        assert body["counterpartyId"] == refs["tiers"]
        assert body["advisory"] is None

    def test_debit_sign_is_corrected(self, client, headers, refs):
        response = client.post("/api/movements", json=self._payload(refs, amount=50), headers=headers)

        assert response.status_code == 201
        assert response.json()["amount"] == -50.0
        assert response.json()["advisory"]

    def test_credit_sign_is_corrected(self, client, headers, refs):
        response = client.post(
            "/api/movements", json=self._payload(refs, amount=-20, type="C"), headers=headers
        )

        assert response.status_code == 201
        assert response.json()["amount"] == 20.0

    def test_invalid_type_is_409(self, client, headers, refs):
        response = client.post("/api/movements", json=self._payload(refs, type="X"), headers=headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_TYPE"

    def test_zero_amount_is_400(self, client, headers, refs):
        response = client.post("/api/movements", json=self._payload(refs, amount=0), headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_AMOUNT"

    def test_bad_date_is_400(self, client, headers, refs):
        response = client.post(
            "/api/movements", json=self._payload(refs, date="01/02/2024"), headers=headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DATE"

    def test_missing_fields_lists_them(self, client, headers):
        response = client.post("/api/movements", json={"type": "D"}, headers=headers)

        assert response.status_code == 400
        message = response.json()["error"]["message"]
        assert "account_id" in message or "accountId" in message

    def test_other_users_account_is_forbidden(self, client, refs, register):
        bob = register("bob", "bob-password")

        response = client.post("/api/movements", json=self._payload(refs), headers=bob)

        assert response.status_code == 403

    def test_list_filters(self, client, headers, refs):
        client.post("/api/movements", json=self._payload(refs, date="2024-01-10"), headers=headers)
        client.post("/api/movements", json=self._payload(refs, date="2024-03-10"), headers=headers)

        response = client.get(
            "/api/movements",
            params={"accountId": refs["account"], "start": "2024-03-01", "end": "2024-03-31"},
            headers=headers,
        )

        assert response.status_code == 200
        assert [m["date"] for m in response.json()] == ["2024-03-10"]

    def test_list_empty_is_204(self, client, headers, refs):
        response = client.get("/api/movements", headers=headers)
        assert response.status_code == 204

    def test_period_and_range_together_is_400(self, client, headers):
        response = client.get(
            "/api/movements", params={"period": "this-month", "start": "2024-01-01"}, headers=headers
        )
        assert response.status_code == 400

    def test_patch_same_values_is_304(self, client, headers, refs):
        created = client.post("/api/movements", json=self._payload(refs), headers=headers).json()

        response = client.patch(
            f"/api/movements/{created['id']}", json={"amount": -50}, headers=headers
        )

        assert response.status_code == 304


class TestTransfers:
    """Tests for /api/transfers."""

    def test_create(self, client, headers, refs):
        response = client.post(
            "/api/transfers",
            json={
                "debitAccountId": refs["account"],
                "creditAccountId": refs["savings"],
                "amount": 100,
                "date": "2024-02-01",
            },
            headers=headers,
        )

        assert response.status_code == 201
        assert response.json()["amount"] == 100.0
        assert response.json()["counterpartyId"] is None

    @pytest.mark.parametrize("amount", [100, -5, "abc"])
    def test_same_account_is_409(self, client, headers, refs, amount):
        response = client.post(
            "/api/transfers",
            json={
                "debitAccountId": refs["account"],
                "creditAccountId": refs["account"],
                "amount": amount,
                "date": "not-a-date",
            },
            headers=headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SAME_ACCOUNT"

    @pytest.mark.parametrize("amount", [0, -10])
    def test_non_positive_amount_is_400(self, client, headers, refs, amount):
        response = client.post(
            "/api/transfers",
            json={
                "debitAccountId": refs["account"],
                "creditAccountId": refs["savings"],
                "amount": amount,
                "date": "2024-02-01",
            },
            headers=headers,
        )

        assert response.status_code == 400

    def test_other_users_accounts_are_forbidden(self, client, refs, register):
        bob = register("bob", "bob-password")

        response = client.post(
            "/api/transfers",
            json={
                "debitAccountId": refs["account"],
                "creditAccountId": refs["savings"],
                "amount": 10,
                "date": "2024-02-01",
            },
            headers=bob,
        )

        assert response.status_code == 403
