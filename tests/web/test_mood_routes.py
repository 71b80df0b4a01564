"""Tests for mood API routes."""

from datetime import date, datetime, timedelta

from mood.storage import MoodStorage


def test_requires_auth(client):
    res = client.get("/api/moods/daily")
    assert res.status_code == 401
    assert res.json()["success"] is False


def test_rejects_bad_token(client):
    res = client.get("/api/moods/daily", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Invalid or expired token"}


def test_create_then_update(client, auth_headers):
    res = client.post(
        "/api/moods",
        headers=auth_headers,
        json={"moodType": "happy", "notes": "sunny", "tags": ["walk"]},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Mood entry created successfully"
    assert body["data"]["moodType"] == "happy"
    assert body["data"]["moodScore"] == 4
    first_id = body["data"]["id"]

    res = client.post("/api/moods", headers=auth_headers, json={"mood_type": "sad"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Mood entry updated successfully"
    assert body["data"]["id"] == first_id
    assert body["data"]["moodScore"] == 2
    assert body["data"]["notes"] is None


def test_invalid_mood_type(client, auth_headers):
    res = client.post("/api/moods", headers=auth_headers, json={"moodType": "ecstatic"})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert body["errors"][0]["field"] == "moodType"


def test_notes_and_tag_limits(client, auth_headers):
    res = client.post(
        "/api/moods", headers=auth_headers, json={"moodType": "happy", "notes": "x" * 501}
    )
    assert res.status_code == 400

    res = client.post(
        "/api/moods", headers=auth_headers, json={"moodType": "happy", "tags": ["t" * 21]}
    )
    assert res.status_code == 400


def test_daily_empty_then_filled(client, auth_headers):
    res = client.get("/api/moods/daily", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": None}

    client.post("/api/moods", headers=auth_headers, json={"moodType": "very_happy"})
    res = client.get("/api/moods/daily", headers=auth_headers)
    assert res.json()["data"]["moodScore"] == 5


def _seed(users_db, user_id, mood_types):
    """One mood per day, newest last, ending today."""
    storage = MoodStorage(users_db)
    now = datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
    for offset, mood_type in enumerate(reversed(mood_types)):
        storage.upsert_for_day(user_id, mood_type, now=now - timedelta(days=offset))


def test_history_paginates(client, auth_headers, users_db):
    _seed(users_db, "user-123", ["sad", "neutral", "happy", "very_happy", "happy"])

    res = client.get("/api/moods/history?limit=2&page=2", headers=auth_headers)

    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 2
    assert body["total"] == 5
    assert body["pagination"] == {"page": 2, "limit": 2, "pages": 3}
    assert [m["moodType"] for m in body["data"]] == ["happy", "neutral"]


def test_history_date_filter_end_inclusive(client, auth_headers, users_db):
    _seed(users_db, "user-123", ["sad", "neutral", "happy"])
    yesterday = (date.today() - timedelta(days=1)).isoformat()

    res = client.get(
        f"/api/moods/history?startDate={yesterday}&endDate={yesterday}", headers=auth_headers
    )

    assert res.json()["total"] == 1
    assert res.json()["data"][0]["moodType"] == "neutral"


def test_history_is_user_scoped(client, auth_headers, auth_headers_b):
    client.post("/api/moods", headers=auth_headers, json={"moodType": "happy"})

    res = client.get("/api/moods/history", headers=auth_headers_b)

    assert res.json()["total"] == 0
    assert res.json()["data"] == []


def test_average(client, auth_headers, users_db):
    _seed(users_db, "user-123", ["sad", "happy"])

    res = client.get("/api/moods/average?period=7d", headers=auth_headers)

    assert res.status_code == 200
    assert res.json()["data"] == {
        "averageScore": 3.0,
        "totalEntries": 2,
        "moodDistribution": {"sad": 1, "happy": 1},
    }


def test_average_no_data(client, auth_headers):
    res = client.get("/api/moods/average", headers=auth_headers)
    assert res.json()["data"] == {"averageScore": 0, "totalEntries": 0, "moodDistribution": {}}
