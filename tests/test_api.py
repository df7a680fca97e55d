"""Tests for the HTTP API."""

from datetime import UTC, datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from calorik.api.app import create_app
from calorik.containers import AppContainer
from tests.conftest import FakeEstimatorClient

PROFILE_PAYLOAD = {
    "name": "Dana",
    "sex": "male",
    "age": 30,
    "height_cm": 180,
    "weight_kg": 90,
    "target_weight_kg": 80,
    "activity_level": "medium",
    "goal": "lose",
    "target_duration_weeks": 10,
}


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def profile_id(client: TestClient) -> str:
    response = client.post("/profiles", json=PROFILE_PAYLOAD)
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_list_profiles(client: TestClient, profile_id: str) -> None:
    data = client.get("/profiles").json()

    assert [p["id"] for p in data["profiles"]] == [profile_id]
    assert data["profiles"][0]["activity_level"] == "medium"


def test_create_profile_validates_input(client: TestClient) -> None:
    payload = dict(PROFILE_PAYLOAD, height_cm=0)

    assert client.post("/profiles", json=payload).status_code == 422
    payload = dict(PROFILE_PAYLOAD, goal="bulk")
    assert client.post("/profiles", json=payload).status_code == 422
    payload = {k: v for k, v in PROFILE_PAYLOAD.items() if k != "activity_level"}
    assert client.post("/profiles", json=payload).status_code == 422


def test_goals_endpoint(client: TestClient, profile_id: str) -> None:
    data = client.get(f"/profiles/{profile_id}/goals").json()

    assert data["goals"]["calories"] == 1814
    assert data["goals"]["protein_g"] == 136
    assert data["goals"]["bmi"] == 27.8
    assert data["bmi_category"] == "overweight"
    assert data["daily_deficit"] == 1100


def test_update_profile_changes_goals(client: TestClient, profile_id: str) -> None:
    response = client.patch(
        f"/profiles/{profile_id}", json={"goal": "maintain", "weight_kg": 88}
    )

    assert response.status_code == 200
    assert response.json()["goal"] == "maintain"
    goals = client.get(f"/profiles/{profile_id}/goals").json()["goals"]
    assert goals["calories"] == round((880 + 1125 - 150 + 5) * 1.55)


def test_unknown_profile_is_404(client: TestClient) -> None:
    response = client.get("/profiles/00000000-0000-0000-0000-000000000001")

    assert response.status_code == 404


def test_delete_requires_confirmation_and_cascades(
    client: TestClient, profile_id: str
) -> None:
    client.post(
        f"/profiles/{profile_id}/foods",
        json={"day": "2024-05-01", "items": [{"name": "toast", "calories": 75}]},
    )
    client.put(f"/profiles/{profile_id}/weights/2024-05-01", json={"weight_kg": 89})

    refused = client.delete(f"/profiles/{profile_id}")
    assert refused.status_code == 409
    assert client.get(f"/profiles/{profile_id}").status_code == 200

    deleted = client.delete(f"/profiles/{profile_id}", params={"confirm": "true"})
    assert deleted.status_code == 200
    assert client.get("/profiles").json() == {"profiles": []}
    assert client.get(f"/profiles/{profile_id}/foods").status_code == 404
    assert client.get(f"/profiles/{profile_id}/weights").status_code == 404


def test_food_log_crud(client: TestClient, profile_id: str) -> None:
    created = client.post(
        f"/profiles/{profile_id}/foods",
        json={
            "day": "2024-05-01",
            "items": [
                {"name": "eggs", "calories": 180, "protein": 12, "fat": 14},
                {"name": "toast", "calories": 75, "protein": 2.5, "carbs": 14},
            ],
        },
    )
    assert created.status_code == 201
    eggs_id = created.json()["items"][0]["id"]

    edited = client.patch(
        f"/profiles/{profile_id}/foods/{eggs_id}", json={"calories": 200}
    )
    assert edited.status_code == 200
    assert edited.json()["calories"] == 200
    assert edited.json()["name"] == "eggs"

    removed = client.delete(f"/profiles/{profile_id}/foods/{eggs_id}")
    assert removed.status_code == 200

    listing = client.get(
        f"/profiles/{profile_id}/foods", params={"day": "2024-05-01"}
    ).json()
    assert [item["name"] for item in listing["items"]] == ["toast"]
    missing = client.delete(f"/profiles/{profile_id}/foods/{eggs_id}")
    assert missing.status_code == 404


def test_food_log_rejects_negative_values(client: TestClient, profile_id: str) -> None:
    response = client.post(
        f"/profiles/{profile_id}/foods",
        json={"items": [{"name": "bad", "calories": -5}]},
    )

    assert response.status_code == 422


def test_presets(client: TestClient, profile_id: str) -> None:
    presets = client.get("/presets").json()["presets"]
    assert any(p["name"] == "Banana (medium)" for p in presets)

    logged = client.post(
        f"/profiles/{profile_id}/foods/presets",
        json={"day": "2024-05-01", "names": ["Banana (medium)"]},
    )
    assert logged.status_code == 201
    assert logged.json()["items"][0]["calories"] == 105

    unknown = client.post(
        f"/profiles/{profile_id}/foods/presets", json={"names": ["Unicorn steak"]}
    )
    assert unknown.status_code == 404


def test_summary_and_week(client: TestClient, profile_id: str) -> None:
    client.post(
        f"/profiles/{profile_id}/foods",
        json={"day": "2024-05-01", "items": [{"name": "pasta", "calories": 814}]},
    )

    summary = client.get(
        f"/profiles/{profile_id}/summary", params={"day": "2024-05-01"}
    ).json()
    assert summary["consumed"]["calories"] == 814
    assert summary["remaining_calories"] == 1000

    week = client.get(
        f"/profiles/{profile_id}/week", params={"day": "2024-05-01"}
    ).json()
    assert week["start"] == "2024-04-29"
    assert len(week["daily"]) == 7


def test_weight_upsert_mirrors_today(client: TestClient, profile_id: str) -> None:
    today = datetime.now(tz=UTC).date().isoformat()

    client.put(f"/profiles/{profile_id}/weights/2024-05-01", json={"weight_kg": 92})
    client.put(f"/profiles/{profile_id}/weights/{today}", json={"weight_kg": 89})
    client.put(f"/profiles/{profile_id}/weights/{today}", json={"weight_kg": 88.5})

    entries = client.get(f"/profiles/{profile_id}/weights").json()["entries"]
    assert [e["weight_kg"] for e in entries] == [92, 88.5]
    assert client.get(f"/profiles/{profile_id}").json()["weight_kg"] == 88.5

    progress = client.get(f"/profiles/{profile_id}/progress").json()
    assert progress["starting_weight_kg"] == 92
    assert progress["weight_to_go_kg"] == 8.5

    points = client.get(f"/profiles/{profile_id}/trend").json()["points"]
    assert [p["day"] for p in points] == ["2024-05-01", today]


def test_weight_must_be_positive(client: TestClient, profile_id: str) -> None:
    response = client.put(
        f"/profiles/{profile_id}/weights/2024-05-01", json={"weight_kg": 0}
    )

    assert response.status_code == 422


def test_estimate_text(client: TestClient) -> None:
    response = client.post("/estimate/text", json={"description": "oatmeal"})

    assert response.status_code == 200
    assert response.json()["item"]["calories"] == 320


def test_estimate_image(client: TestClient) -> None:
    response = client.post(
        "/estimate/image",
        content=b"\xff\xd8\xffjpeg-bytes",
        headers={"Content-Type": "image/jpeg"},
    )

    assert response.status_code == 200
    assert [i["name"] for i in response.json()["items"]] == ["rice", "grilled chicken"]


def test_estimate_image_requires_body(client: TestClient) -> None:
    assert client.post("/estimate/image").status_code == 422


def test_estimate_failure_is_reported_inline(
    client: TestClient, estimator_client: FakeEstimatorClient, profile_id: str
) -> None:
    estimator_client.error = httpx.ConnectError("offline")

    response = client.post("/estimate/text", json={"description": "pizza"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Nutrition estimator is unavailable"
    assert client.get(f"/profiles/{profile_id}/foods").json()["items"] == []


def test_estimate_text_without_food_reports_message(
    client: TestClient, estimator_client: FakeEstimatorClient
) -> None:
    estimator_client.text_payload = {
        "name": "unknown",
        "calories": 0,
        "protein": 0,
        "carbs": 0,
        "fat": 0,
    }

    response = client.post("/estimate/text", json={"description": "a rock"})

    assert response.status_code == 200
    assert response.json() == {"item": None, "detail": "No food recognised"}


def test_estimate_image_without_food_reports_message(
    client: TestClient, estimator_client: FakeEstimatorClient
) -> None:
    estimator_client.image_payload = {"items": []}

    response = client.post("/estimate/image", content=b"\x89PNG\r\n\x1a\nempty")

    assert response.status_code == 200
    assert response.json() == {"items": [], "detail": "No food recognised"}


def test_foods_with_and_without_timezone_share_a_day(
    client: TestClient, profile_id: str
) -> None:
    day = "2026-10-17"
    client.post(
        f"/profiles/{profile_id}/foods",
        json={
            "day": day,
            "items": [
                {"name": "eggs", "calories": 180, "timestamp": "2026-10-17T08:00:00"}
            ],
        },
    )
    client.post(
        f"/profiles/{profile_id}/foods",
        json={"day": day, "items": [{"name": "salad", "calories": 120}]},
    )

    foods = client.get(f"/profiles/{profile_id}/foods", params={"day": day})
    summary = client.get(f"/profiles/{profile_id}/summary", params={"day": day})

    assert foods.status_code == 200
    assert {item["name"] for item in foods.json()["items"]} == {"eggs", "salad"}
    eggs = next(i for i in foods.json()["items"] if i["name"] == "eggs")
    assert eggs["timestamp"] in ("2026-10-17T08:00:00Z", "2026-10-17T08:00:00+00:00")
    assert summary.status_code == 200
    assert summary.json()["consumed"]["calories"] == 300


def test_profile_name_cannot_be_cleared(client: TestClient, profile_id: str) -> None:
    response = client.patch(f"/profiles/{profile_id}", json={"name": None})

    assert response.status_code == 422
    assert client.get(f"/profiles/{profile_id}").json()["name"] == "Dana"


def test_daily_deficit_rounds_halves_up(client: TestClient) -> None:
    # 3 kg over 8 weeks is 412.5 kcal/day
    payload = dict(PROFILE_PAYLOAD, target_weight_kg=87, target_duration_weeks=8)
    profile_id = client.post("/profiles", json=payload).json()["id"]

    data = client.get(f"/profiles/{profile_id}/goals").json()

    assert data["daily_deficit"] == 413
