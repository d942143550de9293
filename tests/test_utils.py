from datetime import datetime, timedelta, timezone

from examgate.utils import json_utils, time_utils


def test_json_round_trip() -> None:
    payload = {"message": "привет", "count": 2}
    dumped = json_utils.json_dump(payload)
    assert "привет" in dumped
    assert " " not in dumped.replace("привет", "")
    assert json_utils.json_load(dumped) == payload
    assert json_utils.json_load(json_utils.json_pretty(payload)) == payload


def test_json_load_object() -> None:
    assert json_utils.json_load_object('{"ok": true}') == {"ok": True}
    assert json_utils.json_load_object("[1, 2]") is None
    assert json_utils.json_load_object("Internal Server Error") is None
    assert json_utils.json_load_object("") is None
    assert json_utils.json_load_object(None) is None


def test_time_utils() -> None:
    now = time_utils.utc_now()
    assert now.tzinfo is not None

    naive = datetime(2026, 1, 2, 3, 4, 5)
    assert time_utils.format_timestamp(naive) == "2026-01-02 03:04:05 UTC"

    plus_two = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert time_utils.format_timestamp(plus_two).startswith("2026-01-02 03:04:05")
