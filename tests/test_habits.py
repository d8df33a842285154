"""
Integration tests for habit CRUD, ordering and completions.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from factories import habit_payload, new_habit, new_user, seed_completion


def _today_utc() -> date:
    return datetime.now(tz=timezone.utc).date()


class TestCreateHabit:
    def test_create_basic(self, client):
        user_id = new_user(client)
        r = client.post(f"/users/{user_id}/habits", json=habit_payload())
        assert r.status_code == 201
        body = r.json()
        assert body["id"] > 0
        assert body["user_id"] == user_id
        assert body["sort_order"] == 1
        assert body["build"] is True
        assert body["fail_reflection_limit"] == 3
        assert body["created_at"]

    def test_sort_order_appends(self, client):
        user_id = new_user(client)
        orders = [new_habit(client, user_id, name=f"H{i}")["sort_order"] for i in range(3)]
        assert orders == [1, 2, 3]

    def test_seventh_habit_rejected(self, client):
        user_id = new_user(client)
        for i in range(6):
            new_habit(client, user_id, name=f"H{i}")
        r = client.post(f"/users/{user_id}/habits", json=habit_payload(name="one too many"))
        assert r.status_code == 400
        body = r.json()
        assert body["code"] == "HABIT_LIMIT_REACHED"
        assert body["details"]["max_habits"] == 6

    def test_unknown_user(self, client):
        r = client.post("/users/999999/habits", json=habit_payload())
        assert r.status_code == 404
        assert r.json()["code"] == "USER_NOT_FOUND"

    @pytest.mark.parametrize("overrides", [
        {"fail_reflection_limit": -1},
        {"cue": "   "},
        {"name": ""},
        {"fail_reflection_limit": "often"},
    ])
    def test_invalid_payload(self, client, overrides):
        user_id = new_user(client)
        r = client.post(f"/users/{user_id}/habits", json=habit_payload(**overrides))
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_missing_field(self, client):
        user_id = new_user(client)
        payload = habit_payload()
        del payload["reward"]
        r = client.post(f"/users/{user_id}/habits", json=payload)
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert any("reward" in f for f in fields)


class TestReadUpdateDelete:
    def test_get_habit(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.get(f"/habits/{habit['id']}")
        assert r.status_code == 200
        assert r.json()["name"] == habit["name"]

    def test_get_unknown_habit(self, client):
        r = client.get("/habits/999999")
        assert r.status_code == 404
        assert r.json()["code"] == "HABIT_NOT_FOUND"

    def test_list_in_sort_order(self, client):
        user_id = new_user(client)
        ids = [new_habit(client, user_id, name=f"H{i}")["id"] for i in range(3)]
        r = client.get(f"/users/{user_id}/habits")
        assert r.status_code == 200
        assert [h["id"] for h in r.json()] == ids

    def test_partial_update(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.patch(f"/habits/{habit['id']}", json={"fail_reflection_limit": 7, "build": False})
        assert r.status_code == 200
        body = r.json()
        assert body["fail_reflection_limit"] == 7
        assert body["build"] is False
        assert body["name"] == habit["name"]

    def test_update_rejects_negative_limit(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.patch(f"/habits/{habit['id']}", json={"fail_reflection_limit": -2})
        assert r.status_code == 422

    def test_delete_compacts_order(self, client):
        user_id = new_user(client)
        first, second, third = (new_habit(client, user_id, name=f"H{i}") for i in range(3))
        client.post(f"/habits/{second['id']}/complete", json={})

        r = client.delete(f"/habits/{second['id']}")
        assert r.status_code == 204
        assert client.get(f"/habits/{second['id']}").status_code == 404

        remaining = client.get(f"/users/{user_id}/habits").json()
        assert [(h["id"], h["sort_order"]) for h in remaining] == [
            (first["id"], 1),
            (third["id"], 2),
        ]

    def test_delete_frees_a_slot(self, client):
        user_id = new_user(client)
        habits = [new_habit(client, user_id, name=f"H{i}") for i in range(6)]
        client.delete(f"/habits/{habits[0]['id']}")
        created = new_habit(client, user_id, name="replacement")
        assert created["sort_order"] == 6


class TestReorder:
    def test_reorder(self, client):
        user_id = new_user(client)
        a, b, c = (new_habit(client, user_id, name=f"H{i}")["id"] for i in range(3))
        r = client.put(f"/users/{user_id}/habits/order", json={"habit_ids": [c, a, b]})
        assert r.status_code == 200
        assert [(h["id"], h["sort_order"]) for h in r.json()] == [(c, 1), (a, 2), (b, 3)]

    @pytest.mark.parametrize("mutate", [
        lambda ids: ids[:-1],
        lambda ids: ids + [ids[0]],
        lambda ids: ids[:-1] + [999999],
    ])
    def test_reorder_requires_permutation(self, client, mutate):
        user_id = new_user(client)
        ids = [new_habit(client, user_id, name=f"H{i}")["id"] for i in range(3)]
        r = client.put(f"/users/{user_id}/habits/order", json={"habit_ids": mutate(ids)})
        assert r.status_code == 400
        assert r.json()["code"] == "INVALID_ARGUMENT"


class TestCompletions:
    def test_complete_today(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.post(f"/habits/{habit['id']}/complete", json={})
        assert r.status_code == 201
        body = r.json()
        assert body["habit_id"] == habit["id"]
        assert body["date"] == str(_today_utc())

    def test_complete_without_body(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.post(f"/habits/{habit['id']}/complete")
        assert r.status_code == 201

    def test_complete_explicit_day(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.post(f"/habits/{habit['id']}/complete", json={"day": "2025-01-15"})
        assert r.status_code == 201
        assert r.json()["date"] == "2025-01-15"

    def test_complete_twice_same_day(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        client.post(f"/habits/{habit['id']}/complete", json={"day": "2025-01-15"})
        r = client.post(f"/habits/{habit['id']}/complete", json={"day": "2025-01-15"})
        assert r.status_code == 409
        body = r.json()
        assert body["code"] == "HABIT_ALREADY_COMPLETED"
        assert body["details"]["day"] == "2025-01-15"

    def test_complete_unknown_habit(self, client):
        r = client.post("/habits/999999/complete", json={})
        assert r.status_code == 404

    def test_complete_unknown_timezone(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        r = client.post(f"/habits/{habit['id']}/complete?tz=Nowhere/Town", json={})
        assert r.status_code == 400
        assert r.json()["code"] == "INVALID_ARGUMENT"

    def test_complete_future_day_rejected(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        future = str(_today_utc() + timedelta(days=2))
        r = client.post(f"/habits/{habit['id']}/complete?tz=UTC", json={"day": future})
        assert r.status_code == 400
        body = r.json()
        assert body["code"] == "INVALID_ARGUMENT"
        assert body["details"] == {"field": "day", "value": future}

        history = client.get(f"/habits/{habit['id']}/completions").json()
        assert history == []

    def test_complete_explicit_today_allowed(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        today = str(_today_utc())
        r = client.post(f"/habits/{habit['id']}/complete?tz=UTC", json={"day": today})
        assert r.status_code == 201
        assert r.json()["date"] == today

    def test_undo_today(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        client.post(f"/habits/{habit['id']}/complete", json={})
        r = client.delete(f"/habits/{habit['id']}/complete")
        assert r.status_code == 204
        assert client.get(f"/habits/{habit['id']}/completions").json() == []

    def test_undo_twice(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        client.post(f"/habits/{habit['id']}/complete", json={})
        client.delete(f"/habits/{habit['id']}/complete")
        r = client.delete(f"/habits/{habit['id']}/complete")
        assert r.status_code == 400
        assert r.json()["code"] == "HABIT_NOT_COMPLETED_TODAY"

    def test_undo_leaves_past_days_alone(self, client, db):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        yesterday = _today_utc() - timedelta(days=1)
        seed_completion(db, habit["id"], yesterday)

        r = client.delete(f"/habits/{habit['id']}/complete")
        assert r.status_code == 400
        history = client.get(f"/habits/{habit['id']}/completions").json()
        assert [c["date"] for c in history] == [str(yesterday)]

    def test_history_newest_first(self, client):
        user_id = new_user(client)
        habit = new_habit(client, user_id)
        for day in ("2025-01-10", "2025-01-12", "2025-01-11"):
            client.post(f"/habits/{habit['id']}/complete", json={"day": day})
        r = client.get(f"/habits/{habit['id']}/completions")
        assert r.status_code == 200
        assert [c["date"] for c in r.json()] == ["2025-01-12", "2025-01-11", "2025-01-10"]
