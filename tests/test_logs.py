from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from fittrack.models.calorie import CalorieLog
from fittrack.models.weight import WeightLog
from fittrack.services import weight_service
from fittrack.services.log_store import calorie_logs
from fittrack.services.weight_service import WeightLogStore, weight_logs
from fittrack.utils.errors import LogNotFoundError


def test_calorie_log_requires_session(client, signup):
    signup()
    client.cookies.clear()

    response = client.post("/api/calorie-log", json={"calories": 500})

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_calorie_log_is_owned_by_session_user(client, signup, db_session):
    user_id, _ = signup()

    response = client.post("/api/calorie-log", json={"calories": 500})

    assert response.status_code == 201
    payload = response.json()["data"]
    assert payload["calories"] == 500
    assert payload["user_id"] == user_id
    stored = db_session.query(CalorieLog).filter(CalorieLog.id == payload["id"]).one()
    assert stored.user_id == user_id


def test_calorie_log_rejects_bad_values(client, signup):
    signup()

    for body, message in (
        ({}, "calories is required"),
        ({"calories": "500"}, "calories must be a positive integer"),
        ({"calories": 0}, "calories must be a positive integer"),
        ({"calories": -20}, "calories must be a positive integer"),
        ({"calories": 12.5}, "calories must be a positive integer"),
        ({"calories": True}, "calories must be a positive integer"),
        ({"calories": 300, "date": "yesterday"}, "date must be an ISO-8601 date or datetime"),
    ):
        response = client.post("/api/calorie-log", json=body)
        assert response.status_code == 400, body
        assert response.json()["error"] == message


def test_logs_are_listed_newest_first(client, signup):
    signup()
    for day, calories in (("2024-01-01", 100), ("2024-03-01", 300), ("2024-02-01", 200)):
        client.post("/api/calorie-log", json={"calories": calories, "date": day})

    response = client.get("/api/calorie-log")

    assert response.status_code == 200
    assert [log["calories"] for log in response.json()["data"]] == [300, 200, 100]


def test_calorie_log_update_and_delete(client, signup):
    signup()
    log_id = client.post("/api/calorie-log", json={"calories": 500}).json()["data"]["id"]

    updated = client.put(f"/api/calorie-log/{log_id}", json={"calories": 650})
    assert updated.status_code == 200
    assert updated.json()["data"]["calories"] == 650
    assert updated.json()["data"]["id"] == log_id

    deleted = client.delete(f"/api/calorie-log/{log_id}")
    assert deleted.status_code == 200
    assert client.get("/api/calorie-log").json()["data"] == []

    assert client.delete(f"/api/calorie-log/{log_id}").status_code == 404
    assert client.put(f"/api/calorie-log/{log_id}", json={"calories": 1}).status_code == 404


def test_other_users_logs_are_invisible(client, signup, login, db_session):
    signup(name="Ann", email="ann@x.com")
    calorie_id = client.post("/api/calorie-log", json={"calories": 500}).json()["data"]["id"]
    weight_id = client.post("/api/weight-log", json={"weight": 150}).json()["data"]["id"]
    activity_id = client.post("/api/activity-log", json={"activity": "Running"}).json()["data"]["id"]

    signup(name="Bob", email="bob@x.com")

    assert client.get("/api/calorie-log").json()["data"] == []
    assert client.get("/api/weight-log").json()["data"] == []
    assert client.get("/api/activity-log").json()["data"] == []
    aggregate = client.get("/api/logs").json()["data"]
    assert aggregate == {"calorie_logs": [], "weight_logs": [], "activity_logs": []}

    for path, body in (
        (f"/api/calorie-log/{calorie_id}", {"calories": 1}),
        (f"/api/weight-log/{weight_id}", {"weight": 1}),
        (f"/api/activity-log/{activity_id}", {"activity": "Hacked"}),
    ):
        put = client.put(path, json=body)
        assert put.status_code == 404
        assert put.json()["error"] == "Log not found"
        assert client.delete(path).status_code == 404

    login("ann@x.com", "secret123")
    aggregate = client.get("/api/logs").json()["data"]
    assert [log["calories"] for log in aggregate["calorie_logs"]] == [500]
    assert [log["weight"] for log in aggregate["weight_logs"]] == [150]
    assert [log["activity"] for log in aggregate["activity_logs"]] == ["Running"]


def test_weight_log_converges_to_one_row_per_day(client, signup, db_session):
    user_id, _ = signup()

    first = client.post("/api/weight-log", json={"weight": 150, "date": "2024-01-01"})
    second = client.post("/api/weight-log", json={"weight": 160, "date": "2024-01-01"})

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["data"]["id"] == first.json()["data"]["id"]
    assert second.json()["data"]["weight"] == 160
    assert second.json()["data"]["date"] == first.json()["data"]["date"]

    listed = client.get("/api/weight-log").json()["data"]
    assert len(listed) == 1
    assert listed[0]["weight"] == 160
    rows = db_session.query(WeightLog).filter(WeightLog.user_id == user_id).all()
    assert len(rows) == 1


def test_weight_log_same_day_different_times(client, signup):
    signup()

    client.post("/api/weight-log", json={"weight": 150, "date": "2024-01-01T07:30:00"})
    client.post("/api/weight-log", json={"weight": 155, "date": "2024-01-01T21:15:00"})
    client.post("/api/weight-log", json={"weight": 149, "date": "2024-01-02"})

    listed = client.get("/api/weight-log").json()["data"]
    assert [(log["date"][:10], log["weight"]) for log in listed] == [
        ("2024-01-02", 149),
        ("2024-01-01", 155),
    ]


def test_weight_log_days_are_per_user(client, signup):
    signup(name="Ann", email="ann@x.com")
    ann_log = client.post("/api/weight-log", json={"weight": 150, "date": "2024-01-01"}).json()["data"]

    signup(name="Bob", email="bob@x.com")
    bob_log = client.post("/api/weight-log", json={"weight": 200, "date": "2024-01-01"}).json()["data"]

    assert bob_log["id"] != ann_log["id"]
    assert bob_log["weight"] == 200


def test_weight_log_update_and_validation(client, signup):
    signup()
    log_id = client.post("/api/weight-log", json={"weight": 150.5}).json()["data"]["id"]

    updated = client.put(f"/api/weight-log/{log_id}", json={"weight": 149.2})
    assert updated.status_code == 200
    assert updated.json()["data"]["weight"] == 149.2

    bad = client.post("/api/weight-log", json={"weight": "heavy"})
    assert bad.status_code == 400
    assert bad.json()["error"] == "weight must be a positive number"
    assert client.put(f"/api/weight-log/{log_id}", json={"weight": -3}).status_code == 400

    assert client.delete(f"/api/weight-log/{log_id}").status_code == 200
    assert client.get("/api/weight-log").json()["data"] == []


def test_activity_log_crud(client, signup):
    signup()

    created = client.post("/api/activity-log", json={"activity": "  Running 5k ", "date": "2024-05-05"})
    assert created.status_code == 201
    log = created.json()["data"]
    assert log["activity"] == "Running 5k"
    assert log["date"].startswith("2024-05-05")

    blank = client.post("/api/activity-log", json={"activity": "   "})
    assert blank.status_code == 400
    assert blank.json()["error"] == "activity is required"

    renamed = client.put(f"/api/activity-log/{log['id']}", json={"activity": "Cycling"})
    assert renamed.json()["data"]["activity"] == "Cycling"
    assert client.delete(f"/api/activity-log/{log['id']}").status_code == 200


def test_aggregate_logs_ordered_newest_first(client, signup):
    signup()
    client.post("/api/calorie-log", json={"calories": 100, "date": "2024-01-01"})
    client.post("/api/calorie-log", json={"calories": 200, "date": "2024-01-02"})
    client.post("/api/weight-log", json={"weight": 150, "date": "2024-01-01"})
    client.post("/api/weight-log", json={"weight": 151, "date": "2024-01-03"})
    client.post("/api/activity-log", json={"activity": "Walk", "date": "2024-01-05"})

    response = client.get("/api/logs")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [log["calories"] for log in data["calorie_logs"]] == [200, 100]
    assert [log["weight"] for log in data["weight_logs"]] == [151, 150]
    assert [log["activity"] for log in data["activity_logs"]] == ["Walk"]


def test_aggregate_logs_require_session(client):
    response = client.get("/api/logs")

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_weight_day_uniqueness_is_enforced_by_the_database(client, signup, db_session):
    user_id, _ = signup()
    client.post("/api/weight-log", json={"weight": 150, "date": "2024-01-01"})

    db_session.add(
        WeightLog(
            user_id=user_id,
            weight=151,
            date=datetime(2024, 1, 1, 18, 0),
            log_day=date(2024, 1, 1),
        )
    )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_store_filters_by_owner(client, signup, db_session):
    ann_id, _ = signup(name="Ann", email="ann@x.com")
    bob_id, _ = signup(name="Bob", email="bob@x.com")
    log = calorie_logs.create(db_session, ann_id, 400)

    assert calorie_logs.list(db_session, bob_id) == []
    with pytest.raises(LogNotFoundError):
        calorie_logs.get(db_session, bob_id, log.id)
    with pytest.raises(LogNotFoundError):
        calorie_logs.update(db_session, bob_id, log.id, 1)
    with pytest.raises(LogNotFoundError):
        calorie_logs.delete(db_session, bob_id, log.id)
    assert calorie_logs.get(db_session, ann_id, log.id).calories == 400


def _send_raw(client, method, path, raw_json):
    # NaN / Infinity are not valid JSON, so the body is sent as literal text.
    return client.request(method, path, content=raw_json, headers={"Content-Type": "application/json"})


def test_non_finite_numbers_are_rejected(client, signup):
    signup()
    calorie_id = client.post("/api/calorie-log", json={"calories": 500}).json()["data"]["id"]
    weight_id = client.post("/api/weight-log", json={"weight": 150}).json()["data"]["id"]

    for literal in ("NaN", "Infinity", "-Infinity"):
        for method, path, body, message in (
            ("POST", "/api/calorie-log", f'{{"calories": {literal}}}', "calories must be a positive integer"),
            ("PUT", f"/api/calorie-log/{calorie_id}", f'{{"calories": {literal}}}', "calories must be a positive integer"),
            ("POST", "/api/weight-log", f'{{"weight": {literal}, "date": "2024-01-01"}}', "weight must be a positive number"),
            ("PUT", f"/api/weight-log/{weight_id}", f'{{"weight": {literal}}}', "weight must be a positive number"),
        ):
            response = _send_raw(client, method, path, body)
            assert response.status_code == 400, (method, path, literal)
            assert response.json()["error"] == message

    assert [log["calories"] for log in client.get("/api/calorie-log").json()["data"]] == [500]
    assert [log["weight"] for log in client.get("/api/weight-log").json()["data"]] == [150]


def test_weight_fallback_upsert_recovers_from_lost_insert_race(client, signup, db_session, monkeypatch):
    user_id, _ = signup()
    first = weight_logs.create(db_session, user_id, 150, datetime(2024, 1, 1, 8, 0))
    first_id = first.id

    # Force the non-ON CONFLICT path and let the lookup miss the row a
    # concurrent request already inserted.
    monkeypatch.setattr(weight_service, "_UPSERT_INSERTS", {})
    real_find_day = WeightLogStore._find_day
    calls = []

    def _stale_find_day(self, db, owner_id, log_day):
        calls.append(log_day)
        if len(calls) == 1:
            return None
        return real_find_day(self, db, owner_id, log_day)

    monkeypatch.setattr(WeightLogStore, "_find_day", _stale_find_day)

    log = weight_logs.create(db_session, user_id, 160, datetime(2024, 1, 1, 20, 0))

    assert len(calls) == 2
    assert log.id == first_id
    assert log.weight == 160
    rows = db_session.query(WeightLog).filter(WeightLog.user_id == user_id).all()
    assert len(rows) == 1


def test_weight_fallback_upsert_without_race(client, signup, db_session, monkeypatch):
    user_id, _ = signup()
    monkeypatch.setattr(weight_service, "_UPSERT_INSERTS", {})

    first = weight_logs.create(db_session, user_id, 150, datetime(2024, 1, 1, 8, 0))
    first_id = first.id
    second = weight_logs.create(db_session, user_id, 155, datetime(2024, 1, 1, 9, 0))

    assert second.id == first_id
    assert second.weight == 155
