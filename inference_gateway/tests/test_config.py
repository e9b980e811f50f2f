"""Tests for layered client configuration and timeout config."""
from __future__ import annotations

import json

import httpx

from inference_gateway.base.timeouts import build_httpx_timeout, get_timeout_config
from inference_gateway.config import get_client_config, reset_config_cache


def test_defaults():
    cfg = get_client_config()
    assert cfg["base_url"] == "http://localhost:8080/v1"  # nosec B101
    assert "api_key" not in cfg and "timeout" not in cfg  # nosec B101


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("INFERENCE_GATEWAY_URL", "https://gw.example.com/v1/")
    monkeypatch.setenv("INFERENCE_GATEWAY_API_KEY", "sk-live")
    monkeypatch.setenv("INFERENCE_GATEWAY_TIMEOUT", "12.5")
    cfg = get_client_config()
    assert cfg["base_url"] == "https://gw.example.com/v1"  # nosec B101
    assert cfg["api_key"] == "sk-live"  # nosec B101
    assert cfg["timeout"] == 12.5  # nosec B101


def test_placeholder_key_and_bad_timeout_are_ignored(monkeypatch):
    monkeypatch.setenv("INFERENCE_GATEWAY_API_KEY", "changeme")
    monkeypatch.setenv("INFERENCE_GATEWAY_TIMEOUT", "soon")
    cfg = get_client_config()
    assert "api_key" not in cfg and "timeout" not in cfg  # nosec B101


def test_json_file_then_env_then_overrides(monkeypatch, tmp_path):
    path = tmp_path / "gateway.json"
    path.write_text(
        json.dumps({"base_url": "http://file/v1", "timeout": 40, "default_headers": {"X-Team": "a"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("INFERENCE_GATEWAY_CONFIG_FILE", str(path))
    monkeypatch.setenv("INFERENCE_GATEWAY_TIMEOUT", "50")

    cfg = get_client_config({"base_url": "http://override/v1", "api_key": None})
    assert cfg["base_url"] == "http://override/v1"  # nosec B101
    assert cfg["timeout"] == 50.0  # nosec B101
    assert cfg["default_headers"] == {"X-Team": "a"}  # nosec B101


def test_yaml_file_with_env_expansion(monkeypatch, tmp_path):
    path = tmp_path / "gateway.yaml"
    path.write_text("base_url: http://yaml/v1\napi_key: ${MY_GATEWAY_KEY}\n", encoding="utf-8")
    monkeypatch.setenv("MY_GATEWAY_KEY", "sk-from-env")
    monkeypatch.setenv("INFERENCE_GATEWAY_CONFIG_FILE", str(path))
    reset_config_cache()

    cfg = get_client_config()
    assert cfg["base_url"] == "http://yaml/v1"  # nosec B101
    assert cfg["api_key"] == "sk-from-env"  # nosec B101


def test_missing_or_invalid_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("INFERENCE_GATEWAY_CONFIG_FILE", str(tmp_path / "absent.yaml"))
    assert get_client_config()["base_url"] == "http://localhost:8080/v1"  # nosec B101

    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("INFERENCE_GATEWAY_CONFIG_FILE", str(bad))
    assert get_client_config()["base_url"] == "http://localhost:8080/v1"  # nosec B101


def test_timeout_config_env(monkeypatch):
    monkeypatch.setenv("IG_TIMEOUT_HTTP_SECONDS", "5")
    monkeypatch.setenv("IG_TIMEOUT_STREAM_SECONDS", "90")
    monkeypatch.setenv("IG_TIMEOUT_OVERALL_SECONDS", "-3")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 5.0  # nosec B101
    assert cfg.stream_timeout_seconds == 90.0  # nosec B101
    assert cfg.overall_timeout_seconds == 30.0  # nosec B101

    timeout = build_httpx_timeout(cfg, streaming=True)
    assert isinstance(timeout, httpx.Timeout)  # nosec B101
    assert timeout.connect == 5.0 and timeout.read == 90.0  # nosec B101
    assert build_httpx_timeout(cfg).read == 5.0  # nosec B101


def test_build_httpx_timeout_prefers_client_timeout():
    cfg = get_timeout_config()
    timeout = build_httpx_timeout(cfg, streaming=True, http_seconds=7.5)
    assert timeout.connect == 7.5 and timeout.read == cfg.stream_timeout_seconds  # nosec B101
    assert build_httpx_timeout(cfg, http_seconds=None).read == cfg.http_timeout_seconds  # nosec B101
