from __future__ import annotations

from math import isclose

from flask.testing import FlaskClient


def compounding_payload() -> dict:
    return {
        "principal": 1_000_000,
        "annual_rate_percent": 12,
        "years": 1,
        "compounding_frequency": "monthly",
        "contribution_per_period": "",
    }


def test_compounding_endpoint_returns_ledger(client: FlaskClient):
    resp = client.post("/api/calc/compounding", json=compounding_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["total_periods"] == 12
    assert len(body["ledger"]) == 12
    assert body["ledger"][-1]["ending_balance"] == body["final_balance"]
    assert isclose(body["final_balance"], 1_000_000 * 1.01**12)
    assert body["overall_return"]["is_unbounded"] is False


def test_compounding_endpoint_reports_all_missing_fields(client: FlaskClient):
    payload = compounding_payload()
    payload["years"] = ""
    payload["annual_rate_percent"] = None

    resp = client.post("/api/calc/compounding", json=payload)

    assert resp.status_code == 422
    body = resp.get_json()
    assert set(body["fields"]) == {"years", "annual_rate_percent"}
    assert body["invalid"]["principal"] is False
    assert body["reasons"]["years"] == "enter a number"


def test_compounding_endpoint_uses_configured_period_cap(client: FlaskClient):
    payload = compounding_payload()
    payload["years"] = 100
    payload["compounding_frequency"] = "daily"

    resp = client.post("/api/calc/compounding", json=payload)

    # the test settings cap simulations at 1000 periods
    assert resp.status_code == 422
    assert resp.get_json()["fields"] == ["years"]


def test_compounding_endpoint_rejects_unknown_keys(client: FlaskClient):
    payload = compounding_payload()
    payload["tax_rate"] = 0.2

    resp = client.post("/api/calc/compounding", json=payload)

    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_unbounded_return_is_serialised_as_flag(client: FlaskClient):
    payload = compounding_payload()
    payload["principal"] = 0
    payload["contribution_per_period"] = "10,000"

    resp = client.post("/api/calc/compounding", json=payload)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["overall_return"] == {"value": 0.0, "is_unbounded": True}
    assert body["total_contributions"] == 120_000.0


def test_average_cost_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/calc/average-cost",
        json={
            "entries": [
                {"amount": 1_000_000, "unit_price": 50_000},
                {"amount": 500_000, "unit_price": 40_000},
                {"amount": 0, "unit_price": 1},
            ]
        },
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert isclose(body["total_quantity"], 32.5)
    assert isclose(body["average_price"], 46153.846153846156)
    assert len(body["entries"]) == 3
    assert body["entries"][2]["quantity"] == 0.0


def test_average_cost_endpoint_flags_bad_price(client: FlaskClient):
    resp = client.post(
        "/api/calc/average-cost",
        json={"entries": [{"amount": 1000, "unit_price": 0}]},
    )

    assert resp.status_code == 422
    assert resp.get_json()["fields"] == ["entries.0.unit_price"]


def test_average_cost_endpoint_rejects_malformed_body(client: FlaskClient):
    resp = client.post("/api/calc/average-cost", json={"entries": "nope"})

    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_integer_too_large_for_float_returns_422(client: FlaskClient):
    payload = compounding_payload()
    payload["principal"] = 10**400

    resp = client.post("/api/calc/compounding", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["fields"] == ["principal"]


def test_overflowing_balance_returns_422(client: FlaskClient):
    resp = client.post(
        "/api/calc/compounding",
        json={"principal": 1e308, "annual_rate_percent": 100, "years": 1},
    )

    assert resp.status_code == 422
    assert b"Infinity" not in resp.data
    assert set(resp.get_json()["fields"]) == {"principal", "annual_rate_percent"}


def test_huge_years_returns_422(client: FlaskClient):
    payload = compounding_payload()
    payload["years"] = 1e307
    payload["compounding_frequency"] = "daily"

    resp = client.post("/api/calc/compounding", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["fields"] == ["years"]


def test_oversized_frequency_string_returns_422(client: FlaskClient):
    payload = compounding_payload()
    payload["compounding_frequency"] = "1" * 5000

    resp = client.post("/api/calc/compounding", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["fields"] == ["compounding_frequency"]


def test_schema_errors_serialise_without_exception_context(client: FlaskClient):
    resp = client.post(
        "/api/calc/average-cost",
        json={"entries": [{"amount": 1, "unit_price": 1, "fee": 2}]},
    )

    assert resp.status_code == 422
    detail = resp.get_json()["detail"]
    assert detail and all("ctx" not in item for item in detail)
