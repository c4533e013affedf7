import os
import subprocess
import sys

import pytest

from ddnskit import environment
from ddnskit.environment import (
    fix_timezone,
    get_config_file_path,
    get_config_file_path_default,
    is_run_in_docker,
    is_termux,
    open_explorer,
)


def test_is_termux(monkeypatch):
    monkeypatch.setenv("PREFIX", "/data/data/com.termux/files/usr")
    assert is_termux() is True
    monkeypatch.delenv("PREFIX")
    assert is_termux() is False


def test_is_run_in_docker_matches_file():
    assert is_run_in_docker() == os.path.exists("/.dockerenv")


def test_config_path_from_env(monkeypatch, tmp_path):
    target = str(tmp_path / "conf.yaml")
    monkeypatch.setenv("DDNS_CONFIG_FILE_PATH", target)
    assert get_config_file_path() == target


def test_config_path_default(monkeypatch, tmp_path):
    monkeypatch.delenv("DDNS_CONFIG_FILE_PATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    expected = os.path.join(str(tmp_path), ".ddns_go_config.yaml")
    assert get_config_file_path_default() == expected
    assert get_config_file_path() == expected


def test_fix_timezone_without_getprop(monkeypatch):
    def fail(*args, **kwargs):
        raise FileNotFoundError("getprop")

    monkeypatch.setattr(subprocess, "run", fail)
    assert fix_timezone() is None


def test_fix_timezone_sets_zone(monkeypatch):
    monkeypatch.setenv("TZ", "UTC")

    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="UTC\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    zone = fix_timezone()
    assert zone is not None and zone.key == "UTC"
    assert os.environ["TZ"] == "UTC"


def test_fix_timezone_invalid_zone(monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="No/Such_Zone\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert fix_timezone() is None


@pytest.fixture
def popen_calls(monkeypatch):
    calls = []

    def fake_popen(command, *args, **kwargs):
        calls.append(command)
        return None

    monkeypatch.setattr(subprocess, "Popen", fake_popen)
    return calls


def test_open_explorer_darwin(monkeypatch, popen_calls, capsys):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert open_explorer("http://localhost:9876") is True
    assert popen_calls == [["open", "http://localhost:9876"]]
    assert "Success to open the browser" in capsys.readouterr().out


def test_open_explorer_linux(monkeypatch, popen_calls):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("PREFIX", raising=False)
    assert open_explorer("http://localhost:9876") is True
    assert popen_calls == [["xdg-open", "http://localhost:9876"]]


def test_open_explorer_termux_skips(monkeypatch, popen_calls):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("PREFIX", environment.TERMUX_PREFIX)
    assert open_explorer("http://localhost:9876") is False
    assert popen_calls == []


def test_open_explorer_failure(monkeypatch, capsys):
    monkeypatch.setattr(sys, "platform", "darwin")

    def fail(*args, **kwargs):
        raise FileNotFoundError("open")

    monkeypatch.setattr(subprocess, "Popen", fail)
    assert open_explorer("http://localhost:9876") is False
    out = capsys.readouterr().out
    assert "Please open a browser and visit http://localhost:9876" in out