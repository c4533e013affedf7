import json

from ddnskit import messages
from ddnskit.weblogs import (
    DEFAULT_MAX_LOGS,
    MEMORY_LOGS,
    MemoryLogs,
    Result,
    error_result,
    ok_result,
)


def test_write_returns_length():
    logs = MemoryLogs()
    assert logs.write("hello\n") == len("hello\n")
    assert logs.logs == ["hello\n"]


def test_keeps_only_latest_entries():
    logs = MemoryLogs()
    entries = [f"entry {n}\n" for n in range(DEFAULT_MAX_LOGS + 10)]
    for entry in entries:
        logs.write(entry)
    assert logs.logs == entries[-DEFAULT_MAX_LOGS:]


def test_custom_limit():
    logs = MemoryLogs(max_num=2)
    for entry in ("a", "b", "c"):
        logs.write(entry)
    assert logs.logs == ["b", "c"]


def test_clear():
    logs = MemoryLogs()
    logs.write("x")
    logs.clear()
    assert logs.logs == []
    assert json.loads(logs.to_json()) == []


def test_to_json_round_trip():
    logs = MemoryLogs()
    for entry in ("first line\n", "second \"quoted\" line\n"):
        logs.write(entry)
    assert json.loads(logs.to_json()) == logs.logs


def test_to_json_escapes_html():
    logs = MemoryLogs()
    logs.write("<b>")
    text = logs.to_json()
    assert "<" not in text
    assert "\\u003c" in text
    assert json.loads(text) == ["<b>"]


def test_package_logs_are_captured():
    messages.init_log_lang("en")
    messages.log("网络已连接")
    assert MEMORY_LOGS.logs[-1].endswith("The network is connected\n")


def test_error_result():
    result = error_result("failure")
    assert json.loads(result.to_json()) == {"Code": 500, "Msg": "failure", "Data": None}
    assert result.to_json().endswith("\n")


def test_ok_result():
    result = ok_result("done", {"ip": "127.0.0.1"})
    assert result == Result(200, "done", {"ip": "127.0.0.1"})
    assert json.loads(result.to_json()) == {"Code": 200, "Msg": "done", "Data": {"ip": "127.0.0.1"}}