"""
Tests for the custom exception classes and the error envelope.
"""
from datetime import date

from app.core.errors import (
    EmailAlreadyExistsError,
    HabitAlreadyCompletedError,
    HabitLimitReachedError,
    HabitNotCompletedTodayError,
    HabitNotFoundError,
    InvalidArgumentError,
    TacticNotFoundError,
    UserNotFoundError,
)


class TestExceptionClasses:
    def test_invalid_argument(self):
        err = InvalidArgumentError("bad day", field="day", value="31-12-2030")
        assert err.http_status == 400
        assert err.code == "INVALID_ARGUMENT"
        assert err.to_dict() == {
            "code": "INVALID_ARGUMENT",
            "message": "bad day",
            "details": {"field": "day", "value": "31-12-2030"},
        }

    def test_invalid_argument_without_details(self):
        d = InvalidArgumentError("nope").to_dict()
        assert "details" not in d

    def test_not_found_errors(self):
        assert UserNotFoundError(7).http_status == 404
        assert HabitNotFoundError(7).details == {"habit_id": 7}
        err = TacticNotFoundError([3, 9])
        assert err.code == "TACTIC_NOT_FOUND"
        assert "3, 9" in err.message

    def test_conflicts(self):
        assert EmailAlreadyExistsError("a@b.co").http_status == 409
        err = HabitAlreadyCompletedError(4, date(2031, 1, 2))
        assert err.http_status == 409
        assert err.details == {"habit_id": 4, "day": "2031-01-02"}

    def test_habit_limit(self):
        err = HabitLimitReachedError(6)
        assert err.http_status == 400
        assert "6" in err.message

    def test_not_completed_today(self):
        err = HabitNotCompletedTodayError(4, date(2031, 1, 2))
        assert err.http_status == 400
        assert err.code == "HABIT_NOT_COMPLETED_TODAY"


class TestErrorEnvelope:
    def test_validation_error_shape(self, client):
        r = client.post("/users", json={})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"]["errors"], list)
        assert {"field", "message", "type"} <= set(body["details"]["errors"][0])

    def test_path_param_type_error(self, client):
        r = client.get("/habits/not-a-number")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_openapi_documents_error_envelope(self, client):
        r = client.get("/openapi.json")
        assert r.status_code == 200
        schemas = r.json()["components"]["schemas"]
        assert {"code", "message", "details"} <= set(schemas["ErrorResponse"]["properties"])
