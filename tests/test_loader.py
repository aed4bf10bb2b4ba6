import json

import pytest

from time_on_task.services.errors import EventLoadError
from time_on_task.services.loader import load_events, parse_csv, parse_json

def test_json_parse_success(tmp_path):
    path = tmp_path / "events.json"
    payload = [
        {"userId": 1, "classId": 10, "taskId": "a", "action": "started", "client_time": 5},
        {"user_id": 1, "class_id": 10, "task_id": 42, "action": "finished", "client_time": 9.5},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")

    events = parse_json(path)

    assert len(events) == 2
    assert events[0].user_id == 1
    assert events[0].client_time == 5.0
    assert events[1].task_id == "42"

def test_json_parse_not_a_list(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"action": "started"}), encoding="utf-8")
    with pytest.raises(EventLoadError):
        parse_json(path)

def test_json_parse_malformed(tmp_path):
    path = tmp_path / "events.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(EventLoadError):
        parse_json(path)

def test_json_parse_bad_item(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"userId": 1, "action": "started", "client_time": "soon"}]), encoding="utf-8")
    with pytest.raises(EventLoadError, match="Item 1"):
        parse_json(path)

def test_csv_parse_success(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text(
        "user_id,class_id,task_id,action,client_time\n"
        "1,10,a,started,100\n"
        "1,,a,finished,130.5\n",
        encoding="utf-8",
    )

    events = parse_csv(path)

    assert len(events) == 2
    assert events[1].class_id is None
    assert events[1].client_time == 130.5

def test_csv_parse_missing_action(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("user_id,task_id,action,client_time\n1,a,,100\n", encoding="utf-8")
    with pytest.raises(EventLoadError, match="Item 2"):
        parse_csv(path)

def test_csv_empty_file(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("", encoding="utf-8")
    assert parse_csv(path) == []

def test_load_events_unknown_suffix(tmp_path):
    path = tmp_path / "events.txt"
    path.write_text("", encoding="utf-8")
    with pytest.raises(EventLoadError):
        load_events(path)
