"""Tests for the HTTP and websocket API."""

from uuid import uuid4

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from fit_tracker.api.app import create_app

HEADERS = {"X-Api-Token": "api-token"}
RICE = {
    "name": "ryż biały",
    "kcal_per_100": 130,
    "protein_per_100": 2.7,
    "fat_per_100": 0.3,
    "carb_per_100": 28,
}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_user_routes_require_token(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()

    missing = client.get(f"/users/{user_id}/profile")
    wrong = client.get(f"/users/{user_id}/profile", headers={"X-Api-Token": "nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 401


def test_profile_update_and_targets(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()

    before = client.get(f"/users/{user_id}/profile", headers=HEADERS).json()
    created = client.post(
        f"/users/{user_id}/profile",
        headers=HEADERS,
        json={
            "weight_kg": 70,
            "height_cm": 175,
            "age_years": 30,
            "sex": "male",
            "activity_level": "moderate",
        },
    )
    after = client.get(f"/users/{user_id}/profile", headers=HEADERS).json()
    history = client.get(f"/users/{user_id}/profile/history", headers=HEADERS)

    assert before["profile"] is None
    assert before["targets"]["energy_target"] == 2000
    assert created.status_code == 201
    assert created.json()["targets"]["energy_target"] == 2556
    assert after["profile"]["metrics"]["sex"] == "male"
    assert after["targets"]["macros"]["protein_g"] == 160
    assert len(history.json()["history"]) == 1


def test_profile_rejects_invalid_metrics(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/profile",
        headers=HEADERS,
        json={"weight_kg": -1, "height_cm": 175, "age_years": 30, "sex": "male"},
    )

    assert response.status_code == 422


def test_diary_day_flow(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    base = f"/users/{user_id}"

    entry = client.post(
        f"{base}/diary/2024-06-12/entries",
        headers=HEADERS,
        json={"name": "Jabłko", "kcal": 52.346, "carb": 14},
    )
    meal = client.post(
        f"{base}/diary/2024-06-12/meals",
        headers=HEADERS,
        json={
            "ingredients": [{"food": RICE, "quantity": 150}],
            "save_as_favorite": True,
        },
    )
    day = client.get(f"{base}/diary/2024-06-12", headers=HEADERS).json()

    assert entry.status_code == 201
    assert entry.json()["entry"]["kcal"] == 52.35
    assert meal.status_code == 201
    assert meal.json()["entry"]["name"] == "ryż biały (150g)"
    assert meal.json()["entry"]["kcal"] == 195.0
    assert day["summary"]["entry_count"] == 2
    assert day["summary"]["totals"]["kcal"] == pytest.approx(247.35)
    assert day["summary"]["band"] == "under"
    assert {item["name"] for item in day["entries"]} == {"Jabłko", "ryż biały (150g)"}

    deleted = client.delete(
        f"{base}/entries/{entry.json()['entry']['id']}", headers=HEADERS
    )
    day = client.get(f"{base}/diary/2024-06-12", headers=HEADERS).json()

    assert deleted.json() == {"status": "deleted"}
    assert day["summary"]["entry_count"] == 1


def test_meal_without_ingredients_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/users/{uuid4()}/diary/2024-06-12/meals",
        headers=HEADERS,
        json={"ingredients": []},
    )

    assert response.status_code == 422


def test_favorites_and_history(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    base = f"/users/{user_id}"

    favorite = client.post(
        f"{base}/favorites",
        headers=HEADERS,
        json={"name": "Owsianka", "kcal": 1900, "protein": 60},
    ).json()["favorite"]
    logged = client.post(
        f"{base}/diary/2024-06-11/favorites/{favorite['id']}", headers=HEADERS
    )
    missing = client.post(
        f"{base}/diary/2024-06-11/favorites/{uuid4()}", headers=HEADERS
    )
    client.post(
        f"{base}/diary/2024-06-12/entries",
        headers=HEADERS,
        json={"name": "Pizza", "kcal": 2500},
    )
    history = client.get(f"{base}/history", headers=HEADERS).json()["days"]
    favorites = client.get(f"{base}/favorites", headers=HEADERS).json()["favorites"]

    assert logged.status_code == 201
    assert logged.json()["entry"]["name"] == "Owsianka"
    assert missing.status_code == 404
    assert [day["day"] for day in history] == ["2024-06-12", "2024-06-11"]
    assert [day["band"] for day in history] == ["over", "on_target"]
    assert history[0]["adherence_percent"] == 100
    assert [meal["id"] for meal in favorites] == [favorite["id"]]

    client.delete(f"{base}/favorites/{favorite['id']}", headers=HEADERS)

    assert client.get(f"{base}/favorites", headers=HEADERS).json()["favorites"] == []


def test_food_search_prefers_local_table(container, search_client) -> None:
    client = TestClient(create_app(container))

    local = client.get("/foods/search", params={"q": "Banan"}, headers=HEADERS)
    remote = client.get("/foods/search", params={"q": "skyr"}, headers=HEADERS)

    assert local.json()["result"]["local_match"]["name"] == "banan"
    assert local.json()["result"]["candidates"] == []
    assert len(remote.json()["result"]["candidates"]) == 2
    assert search_client.calls == ["skyr"]


def test_scale_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/foods/scale", headers=HEADERS, json={"food": RICE, "quantity": 150}
    )
    bad_quantity = client.post(
        "/foods/scale", headers=HEADERS, json={"food": RICE, "quantity": 0}
    )

    assert response.json()["totals"]["kcal"] == 195.0
    assert response.json()["totals"]["carb"] == pytest.approx(42)
    assert bad_quantity.status_code == 422


def test_lookup_websocket_answers_per_field(container) -> None:
    client = TestClient(create_app(container))

    with client.websocket_connect("/foods/search/ws?token=api-token") as websocket:
        websocket.send_json({"field_id": "breakfast", "term": "banan"})
        reply = websocket.receive_json()
        websocket.send_json({"nope": True})
        error = websocket.receive_json()

    assert reply["field_id"] == "breakfast"
    assert reply["result"]["local_match"]["kcal_per_100"] == 89
    assert error == {"error": "invalid lookup message"}


def test_lookup_websocket_survives_non_json_frame(container) -> None:
    client = TestClient(create_app(container))

    with client.websocket_connect("/foods/search/ws?token=api-token") as websocket:
        websocket.send_text("not json")
        error = websocket.receive_json()
        websocket.send_json({"field_id": "ingredient", "term": "jabłko"})
        reply = websocket.receive_json()

    assert error == {"error": "invalid lookup message"}
    assert reply["result"]["local_match"]["name"] == "jabłko"


def test_lookup_websocket_rejects_bad_token(container) -> None:
    client = TestClient(create_app(container))

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/foods/search/ws?token=wrong"):
            pass
