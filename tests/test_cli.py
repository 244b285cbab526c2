from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from zipkin_endpoint.__main__ import app
from zipkin_endpoint.config import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("LOG_LEVEL", "DEFAULT_SERVICE_NAME", "PRETTY_JSON"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_build_normalizes_mapped_address():
    result = runner.invoke(
        app,
        ["build", "--service", "Frontend", "--ipv6", "::ffff:192.168.1.1", "--port", "8080"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "serviceName": "frontend",
        "ipv4": "192.168.1.1",
        "port": 8080,
    }


def test_build_keeps_loopback_ipv6():
    result = runner.invoke(app, ["build", "--ipv6", "::1", "--port", "0"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"serviceName": "", "ipv6": "::1"}


def test_build_uses_default_service_name(monkeypatch):
    monkeypatch.setenv("DEFAULT_SERVICE_NAME", "Checkout")
    result = runner.invoke(app, ["build", "--ipv4", "10.0.0.1"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"serviceName": "checkout", "ipv4": "10.0.0.1"}


def test_build_pretty_json(monkeypatch):
    monkeypatch.setenv("PRETTY_JSON", "1")
    result = runner.invoke(app, ["build", "--service", "a"])
    assert result.exit_code == 0, result.output
    assert '\n  "serviceName": "a"' in result.output


@pytest.mark.parametrize(
    "args, message",
    [
        (["build", "--port", "70000"], "invalid port"),
        (["build", "--ipv4", "1.2.3"], "invalid ipv4"),
        (["build", "--ipv6", "nope"], "invalid ip address"),
    ],
)
def test_build_rejects_invalid_input(args, message):
    result = runner.invoke(app, args)
    assert result.exit_code == 2
    assert message in result.output


@pytest.mark.parametrize(
    "address, expected",
    [
        ("::ffff:192.168.1.1", "ipv4-mapped 192.168.1.1"),
        ("::10.0.0.7", "ipv4-compatible 10.0.0.7"),
        ("::", "ipv4-compatible 0.0.0.0"),
        ("::1", "ipv6 ::1"),
        ("2001:db8::c001", "ipv6 2001:db8::c001"),
    ],
)
def test_classify(address, expected):
    result = runner.invoke(app, ["classify", address])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected
