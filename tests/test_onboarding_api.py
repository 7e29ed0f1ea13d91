import json

import pytest
from conftest import profile_body


def test_health(client):
    assert client.get("/").json() == {"status": "ok"}


def test_duplicate_email_conflicts(client, user_id):
    response = client.post("/users", json={"email": "ANA@example.com"})
    assert response.status_code == 409


def test_invalid_email_is_rejected(client):
    assert client.post("/users", json={"email": "not-an-email"}).status_code == 422


def test_status_walks_through_onboarding(client, user_id, tcs):
    status = client.get(f"/users/{user_id}/status").json()
    assert status["has_profile_info"] is False
    assert status["has_completed_onboarding"] is False

    client.post(f"/onboarding/{user_id}/initial-info", json=profile_body())
    status = client.get(f"/users/{user_id}/status").json()
    assert status["has_profile_info"] is True
    assert status["full_name"] == "Ana Rao"
    assert status["has_stock_selection"] is False

    client.post(f"/onboarding/{user_id}/select-stocks", json={"selected_stock_ids": [tcs]})
    status = client.get(f"/users/{user_id}/status").json()
    assert status["has_stock_selection"] is True
    assert status["has_completed_onboarding"] is True


def test_unknown_user(client):
    assert client.get("/users/404/status").status_code == 404
    response = client.post("/onboarding/404/initial-info", json=profile_body())
    assert response.status_code == 404


def test_initial_info_returns_safe_savings(client, user_id):
    response = client.post(f"/onboarding/{user_id}/initial-info", json=profile_body())
    assert response.status_code == 200
    assert response.json() == {"user_id": user_id, "safe_savings": 20000}


def test_fixed_threshold_safe_savings(client, user_id):
    body = profile_body(threshold={"kind": "fixed", "value": 15000})
    response = client.post(f"/onboarding/{user_id}/initial-info", json=body)
    assert response.json()["safe_savings"] == 15000


def test_initial_info_can_be_resubmitted_before_selection(client, user_id):
    client.post(f"/onboarding/{user_id}/initial-info", json=profile_body())
    response = client.post(f"/onboarding/{user_id}/initial-info", json=profile_body(investment=50000))
    assert response.json()["safe_savings"] == 10000


def test_only_india_is_supported(client, user_id):
    response = client.post(f"/onboarding/{user_id}/initial-info", json=profile_body(country="Nepal"))
    assert response.status_code == 400
    assert "India" in response.json()["detail"]


def test_form_validation(client, user_id):
    url = f"/onboarding/{user_id}/initial-info"
    assert client.post(url, json=profile_body(investment=999)).status_code == 422
    assert client.post(url, json=profile_body(rate=101)).status_code == 422
    too_high = profile_body(threshold={"kind": "percentage", "value": 120})
    assert client.post(url, json=too_high).status_code == 422
    negative = profile_body(threshold={"kind": "fixed", "value": -1})
    assert client.post(url, json=negative).status_code == 422


def test_selection_requires_profile(client, user_id, tcs):
    response = client.post(f"/onboarding/{user_id}/select-stocks", json={"selected_stock_ids": [tcs]})
    assert response.status_code == 400


def test_selection_rejects_unknown_stocks(client, user_id, tcs):
    client.post(f"/onboarding/{user_id}/initial-info", json=profile_body())
    response = client.post(
        f"/onboarding/{user_id}/select-stocks", json={"selected_stock_ids": [tcs, "bogus"]}
    )
    assert response.status_code == 400
    assert "bogus" in response.json()["detail"]


def test_selection_requires_at_least_one_stock(client, user_id):
    client.post(f"/onboarding/{user_id}/initial-info", json=profile_body())
    response = client.post(f"/onboarding/{user_id}/select-stocks", json={"selected_stock_ids": []})
    assert response.status_code == 422


def test_selection_activates_portfolio(client, user_id, tcs, infy):
    client.post(f"/onboarding/{user_id}/initial-info", json=profile_body())
    response = client.post(
        f"/onboarding/{user_id}/select-stocks", json={"selected_stock_ids": [tcs, infy, tcs]}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["selected_stock_ids"] == [tcs, infy]
    assert body["onboarding_complete"] is True

    summary = client.get(f"/portfolio/{user_id}").json()["portfolio"]
    assert summary["allocations"] == {tcs: 0, infy: 0}
    assert summary["gold_allocation"] == 0
    assert summary["savings_allocation"] == 20000
    assert summary["unallocated_amount"] == 80000


def test_onboarding_cannot_be_repeated(client, active_user, tcs):
    response = client.post(
        f"/onboarding/{active_user}/select-stocks", json={"selected_stock_ids": [tcs]}
    )
    assert response.status_code == 400
    response = client.post(f"/onboarding/{active_user}/initial-info", json=profile_body())
    assert response.status_code == 400


@pytest.mark.parametrize(
    "field,value",
    [
        ('"initial_investment_amount": 100000', '"initial_investment_amount": Infinity'),
        ('"initial_investment_amount": 100000', '"initial_investment_amount": NaN'),
        ('"annual_savings_interest_rate": 6.5', '"annual_savings_interest_rate": NaN'),
        ('"value": 15000', '"value": Infinity'),
    ],
)
def test_non_finite_profile_numbers_are_rejected(client, user_id, field, value):
    body = json.dumps(profile_body(threshold={"kind": "fixed", "value": 15000}))
    assert field in body
    response = client.post(
        f"/onboarding/{user_id}/initial-info",
        content=body.replace(field, value),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
