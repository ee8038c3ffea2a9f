# tests/test_events_api.py
import re
from datetime import date, datetime, time, timedelta, timezone
from http import HTTPStatus

import pytest

from app.models.event import Event
from app.models.schedule_rule import ScheduleRule
from app.models.user import User

UTC = timezone.utc
ID_PATTERN = re.compile(r"^(group|client)_[A-Za-z0-9_-]+_\d{12}_\d+$")


def _next_monday() -> datetime:
    """
    Midnight (UTC) of the next Monday strictly after today, so generated
    sessions are never in the past.
    """
    today = datetime.now(tz=UTC).date()
    days_ahead = (7 - today.weekday()) % 7 or 7
    return datetime.combine(today + timedelta(days=days_ahead), time(0, 0), tzinfo=UTC)


def _params(start: datetime, end: datetime) -> dict:
    return {"startDate": start.isoformat(), "endDate": end.isoformat()}


def _monday_rule(user_id: str = "u1") -> ScheduleRule:
    return ScheduleRule(
        user_id=user_id,
        weekday=1,
        hour=9,
        minute=0,
        duration_minutes=60,
        group_id="G1",
    )


def _expected_id(day: date) -> str:
    return f"group_G1_{day.strftime('%Y%m%d')}0900_60"


def test_events_requires_caller_identity(client):
    monday = _next_monday()

    resp = client.get("/events", params=_params(monday, monday + timedelta(days=1)))

    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_events_rejects_unknown_user(client):
    monday = _next_monday()

    resp = client.get(
        "/events",
        params=_params(monday, monday + timedelta(days=1)),
        headers={"X-User-Id": "ghost"},
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json()["detail"] == "Invalid user"


def test_events_returns_generated_occurrence_for_schedule(client, seed):
    seed(User(id="u1"), _monday_rule())
    monday = _next_monday()

    resp = client.get(
        "/events",
        params=_params(monday, monday.replace(hour=23, minute=59)),
        headers={"X-User-Id": "u1"},
    )

    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert len(data) == 1

    occurrence = data[0]
    assert occurrence["id"] == _expected_id(monday.date())
    assert ID_PATTERN.match(occurrence["id"])
    assert occurrence["type"] == "group"
    assert occurrence["cancelled"] is False
    assert occurrence["durationMinutes"] == 60
    assert occurrence["group_id"] == "G1"
    assert "client_id" not in occurrence
    assert datetime.fromisoformat(occurrence["from"].replace("Z", "+00:00")) == monday.replace(hour=9)


def test_events_hides_cancelled_override(client, seed):
    monday = _next_monday()
    seed(
        User(id="u1"),
        _monday_rule(),
        Event(
            id=_expected_id(monday.date()),
            user_id="u1",
            start_time=monday.replace(hour=9),
            duration_minutes=60,
            cancelled=True,
            group_id="G1",
        ),
    )

    resp = client.get(
        "/events",
        params=_params(monday, monday.replace(hour=23, minute=59)),
        headers={"X-User-Id": "u1"},
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == []


def test_events_merges_edits_and_one_offs_in_order(client, seed):
    monday = _next_monday()
    seed(
        User(id="u1"),
        _monday_rule(),
        # Edited: moved to 11:00 and made longer, same identity
        Event(
            id=_expected_id(monday.date()),
            user_id="u1",
            start_time=monday.replace(hour=11),
            duration_minutes=90,
            group_id="G1",
        ),
        # One-off individual session with no rule behind it
        Event(
            id=f"client_C1_{monday.strftime('%Y%m%d')}0700_45",
            user_id="u1",
            start_time=monday.replace(hour=7),
            duration_minutes=45,
            client_id="C1",
        ),
    )

    resp = client.get(
        "/events",
        params=_params(monday, monday.replace(hour=23, minute=59)),
        headers={"X-User-Id": "u1"},
    )

    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert [o["type"] for o in data] == ["client", "group"]
    assert data[0]["client_id"] == "C1"
    assert data[1]["id"] == _expected_id(monday.date())
    assert data[1]["durationMinutes"] == 90
    assert data[1]["from"].startswith(monday.replace(hour=11).strftime("%Y-%m-%dT11:00:00"))


def test_events_is_idempotent_across_calls(client, seed):
    seed(
        User(id="u1"),
        _monday_rule(),
        ScheduleRule(user_id="u1", weekday=4, hour=18, minute=15, duration_minutes=30, client_id="C2"),
    )
    monday = _next_monday()
    params = _params(monday, monday + timedelta(days=27))

    first = client.get("/events", params=params, headers={"X-User-Id": "u1"})
    second = client.get("/events", params=params, headers={"X-User-Id": "u1"})

    assert first.status_code == HTTPStatus.OK
    first_ids = [o["id"] for o in first.json()]
    assert first_ids == [o["id"] for o in second.json()]
    assert len(first_ids) == 8
    starts = [o["from"] for o in first.json()]
    assert starts == sorted(starts)


def test_events_ignores_other_users_data(client, seed):
    monday = _next_monday()
    seed(
        User(id="u1"),
        User(id="u2"),
        _monday_rule(user_id="u2"),
        Event(
            id="group_G2_x_0",
            user_id="u2",
            start_time=monday.replace(hour=10),
            duration_minutes=60,
            group_id="G2",
        ),
    )

    resp = client.get(
        "/events",
        params=_params(monday, monday.replace(hour=23)),
        headers={"X-User-Id": "u1"},
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == []


def test_events_rejects_inverted_window(client, seed):
    seed(User(id="u1"))
    monday = _next_monday()

    resp = client.get(
        "/events",
        params=_params(monday + timedelta(days=1), monday),
        headers={"X-User-Id": "u1"},
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json()["detail"] == "endDate must not be before startDate."


def test_events_does_not_mask_malformed_schedule_as_bad_request(client, seed):
    # A stored rule whose subject id cannot form an occurrence id is a server
    # side data problem, not a client error.
    broken = _monday_rule()
    broken.group_id = "G 1"
    seed(User(id="u1"), broken)
    monday = _next_monday()

    with pytest.raises(ValueError):
        client.get(
            "/events",
            params=_params(monday, monday.replace(hour=23, minute=59)),
            headers={"X-User-Id": "u1"},
        )


def test_events_rejects_too_wide_window(client, seed):
    seed(User(id="u1"))
    monday = _next_monday()

    resp = client.get(
        "/events",
        params=_params(monday, monday + timedelta(days=400)),
        headers={"X-User-Id": "u1"},
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "must not exceed" in resp.json()["detail"]


def test_events_requires_both_dates(client, seed):
    seed(User(id="u1"))

    resp = client.get("/events", headers={"X-User-Id": "u1"})

    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
