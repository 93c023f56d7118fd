from app.core.recommendation_config import PERSISTENCE_NOTE


def _payload(**overrides) -> dict:
    data = {
        "primary_symptom": "headache",
        "secondary_symptoms": ["fever"],
        "duration": "1-3 days",
        "medical_history": [],
    }
    data.update(overrides)
    return data


def test_create_recommendation(client):
    response = client.post("/recommendations", json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["session_id"].startswith("session_")
    assert [m["medication_name"] for m in body["recommended"]] == ["Ibuprofen", "Acetaminophen"]
    assert body["excluded"] == []
    assert body["additional_recommendations"] is None
    assert body["summary"] == {"total_medications_found": 2, "recommended_count": 2, "excluded_count": 0}
    assert body["request"]["secondary_symptoms"] == ["fever"]


def test_create_recommendation_with_exclusion(client):
    response = client.post("/recommendations", json=_payload(medical_history=["Kidney disease"]))

    assert response.status_code == 201
    body = response.json()
    assert body["excluded"] == [
        {
            "medication_id": "00000000-0000-0000-0000-000000000001",
            "medication_name": "Ibuprofen",
            "reason": "Contraindicated for kidney disease",
        }
    ]
    assert body["summary"]["excluded_count"] == 1


def test_long_duration_note(client):
    response = client.post(
        "/recommendations",
        json=_payload(primary_symptom="heartburn", secondary_symptoms=[], duration="more than 1 week"),
    )

    body = response.json()
    assert body["recommended"][0]["dosage_recommendation"].endswith(
        "(Consult doctor if symptoms persist beyond 7 days)"
    )
    assert body["additional_recommendations"] == PERSISTENCE_NOTE


def test_unknown_symptom_is_unprocessable(client):
    response = client.post("/recommendations", json=_payload(primary_symptom="toothache"))
    assert response.status_code == 422


def test_missing_duration_is_unprocessable(client):
    payload = _payload()
    del payload["duration"]
    assert client.post("/recommendations", json=payload).status_code == 422


def test_no_result_conditions_are_structured_not_found(client):
    response = client.post("/recommendations", json=_payload(primary_symptom="acid_reflux", secondary_symptoms=[]))
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "no_category_found"

    response = client.post(
        "/recommendations",
        json=_payload(medical_history=["kidney_disease", "liver_disease"]),
    )
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "all_contraindicated"


def test_session_lookup_round_trip(client):
    created = client.post("/recommendations", json=_payload(session_id="session_abc", owner_id="user-1")).json()

    response = client.get("/recommendations/session/session_abc")

    assert response.status_code == 200
    fetched = response.json()
    assert fetched["recommended"] == created["recommended"]
    assert fetched["excluded"] == created["excluded"]
    assert fetched["owner_id"] == "user-1"


def test_duplicate_session_id_conflicts(client):
    assert client.post("/recommendations", json=_payload(session_id="session_dup")).status_code == 201
    assert client.post("/recommendations", json=_payload(session_id="session_dup")).status_code == 409


def test_unknown_session_is_not_found(client):
    assert client.get("/recommendations/session/session_missing").status_code == 404


def test_history_by_owner(client):
    client.post("/recommendations", json=_payload(owner_id="user-5"))
    client.post("/recommendations", json=_payload(primary_symptom="cough", secondary_symptoms=[], owner_id="user-5"))
    client.post("/recommendations", json=_payload())

    response = client.get("/recommendations/history", params={"owner_id": "user-5"})

    assert response.status_code == 200
    history = response.json()
    assert len(history) == 2
    assert all(item["owner_id"] == "user-5" for item in history)


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
