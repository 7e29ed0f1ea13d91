from conftest import profile_body


def test_profile_requires_onboarding(client, user_id):
    response = client.get(f"/profile/{user_id}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Onboarding data not found"


def test_get_profile(client, active_user):
    body = client.get(f"/profile/{active_user}").json()
    assert body["full_name"] == "Ana Rao"
    assert body["location"]["state"] == "Karnataka"
    assert body["savings_threshold"] == {"kind": "percentage", "value": 20}
    assert body["safe_savings"] == 20000


def _allocate_seventy_thousand(client, user_id, tcs):
    response = client.put(
        f"/portfolio/{user_id}/adjust",
        json={"proposed_allocations": {tcs: 40000, "gold": 10000}, "proposed_savings": 20000},
    )
    assert response.status_code == 200


def test_reduce_investment_within_unallocated(client, active_user, tcs):
    _allocate_seventy_thousand(client, active_user, tcs)
    response = client.put(f"/profile/{active_user}", json=profile_body(investment=80000))
    assert response.status_code == 200
    body = response.json()
    assert body["initial_investment_amount"] == 80000
    assert body["old_safe_savings"] == 20000
    assert body["new_safe_savings"] == 16000


def test_reduce_investment_beyond_unallocated(client, active_user, tcs):
    _allocate_seventy_thousand(client, active_user, tcs)
    response = client.put(f"/profile/{active_user}", json=profile_body(investment=60000))
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "InvestmentReductionError"
    assert detail["reduction"] == 40000
    assert detail["unallocated_amount"] == 30000
    assert client.get(f"/profile/{active_user}").json()["initial_investment_amount"] == 100000


def test_raising_floor_above_savings_is_rejected(client, active_user):
    body = profile_body(threshold={"kind": "percentage", "value": 30})
    response = client.put(f"/profile/{active_user}", json=body)
    assert response.status_code == 400
    assert response.json()["detail"]["safe_savings"] == 30000


def test_increase_investment(client, active_user):
    response = client.put(f"/profile/{active_user}", json=profile_body(investment=100000, rate=7))
    assert response.status_code == 200
    predictions = client.get(f"/portfolio/{active_user}/predictions").json()
    assert predictions["predicted_returns"]["savings"] == 7


def test_profile_edit_keeps_country_rule(client, active_user):
    response = client.put(f"/profile/{active_user}", json=profile_body(country="Bhutan"))
    assert response.status_code == 400
