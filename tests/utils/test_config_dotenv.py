import importlib
import logging
import os
import sys
import types
from pathlib import Path

import pytest


@pytest.fixture
def fresh_config(monkeypatch):
    """Re-import linkcheck.config; the original module is restored afterwards."""
    import linkcheck
    import linkcheck.config as original

    monkeypatch.setattr(linkcheck, "config", original)

    def _reload():
        monkeypatch.delitem(sys.modules, "linkcheck.config", raising=False)
        return importlib.import_module("linkcheck.config")
    return _reload


def test_environment_values_are_read(monkeypatch, tmp_path, fresh_config):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setitem(sys.modules, "dotenv", types.SimpleNamespace(load_dotenv=lambda: False))
    monkeypatch.setenv("LINKCHECK_USER_AGENT", "X-Agent")
    monkeypatch.setenv("LINKCHECK_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("LINKCHECK_BUFFER_SIZE", "10")
    cfg = fresh_config()
    assert cfg.USER_AGENT == "X-Agent"
    assert cfg.HTTP_TIMEOUT == 2.5
    assert cfg.BUFFER_SIZE == 10
    assert cfg.RATE_WAIT_TIMEOUT is None


def test_defaults_without_environment(monkeypatch, tmp_path, fresh_config):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setitem(sys.modules, "dotenv", types.SimpleNamespace(load_dotenv=lambda: False))
    for name in ("LINKCHECK_USER_AGENT", "LINKCHECK_HTTP_TIMEOUT", "LINKCHECK_SPEED", "LINKCHECK_BUFFER_SIZE"):
        monkeypatch.delenv(name, raising=False)
    cfg = fresh_config()
    assert cfg.USER_AGENT == "linkchecker"
    assert cfg.HTTP_TIMEOUT == 10.0
    assert cfg.DEFAULT_SPEED == "normal"
    assert cfg.BUFFER_SIZE == 2000


def test_invalid_number_falls_back_and_logs(monkeypatch, tmp_path, caplog, fresh_config):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setitem(sys.modules, "dotenv", types.SimpleNamespace(load_dotenv=lambda: False))
    monkeypatch.setenv("LINKCHECK_BUFFER_SIZE", "lots")
    caplog.set_level(logging.ERROR)
    cfg = fresh_config()
    assert cfg.BUFFER_SIZE == 2000
    assert "Invalid LINKCHECK_BUFFER_SIZE" in caplog.text


def test_dotenv_present_but_fails_to_load(monkeypatch, tmp_path, fresh_config):
    tmp_path.joinpath(".env").write_text("LINKCHECK_USER_AGENT=FromFile")
    monkeypatch.chdir(tmp_path)

    fake = types.SimpleNamespace(load_dotenv=lambda: False)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    with pytest.raises(RuntimeError):
        fresh_config()


def test_dotenv_loads_sets_variables(monkeypatch, tmp_path, fresh_config):
    tmp_path.joinpath(".env").write_text("LINKCHECK_USER_AGENT=DotenvAgent")
    monkeypatch.chdir(tmp_path)
    # Registered so the value written by fake_load is undone after the test.
    monkeypatch.setenv("LINKCHECK_USER_AGENT", "placeholder")

    def fake_load():
        # emulate dotenv behavior: read .env and set os.environ
        p = Path(".env")
        for line in p.read_text().splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                os.environ[k] = v
        return True

    fake = types.SimpleNamespace(load_dotenv=fake_load)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    cfg = fresh_config()
    assert cfg.get_str_env("LINKCHECK_USER_AGENT", "linkchecker") == "DotenvAgent"
    assert cfg.USER_AGENT == "DotenvAgent"
