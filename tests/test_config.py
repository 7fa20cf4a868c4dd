from __future__ import annotations

import json
from pathlib import Path

import pytest

from dexpaprika.config import (
    DEFAULT_BASE_URL,
    ClientConfig,
    config_path,
    load_config,
    parse_config,
)
from dexpaprika.retry import RetryPolicy


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DEXPAPRIKA_CONFIG",
        "DEXPAPRIKA_BASE_URL",
        "DEXPAPRIKA_NO_CACHE",
        "XDG_CONFIG_HOME",
    ):
        monkeypatch.delenv(name, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.json")

    assert config == ClientConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.cache.ttl_seconds == 300.0
    assert config.retry.max_retries == 4


def test_full_file_is_parsed(tmp_path: Path) -> None:
    path = tmp_path / "client_config.json"
    path.write_text(
        json.dumps(
            {
                "base_url": "https://proxy.example.test/",
                "timeout_seconds": 5,
                "coalesce_reads": True,
                "cache": {"ttl_seconds": 60, "max_size": 100, "enabled": False},
                "retry": {
                    "max_retries": 2,
                    "delay_sequence_ms": [100, 500],
                    "retryable_statuses": [429, 503],
                },
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.base_url == "https://proxy.example.test"
    assert config.timeout_seconds == 5.0
    assert config.coalesce_reads is True
    assert config.cache.ttl_seconds == 60.0
    assert config.cache.max_size == 100
    assert config.cache.enabled is False
    assert config.retry.max_retries == 2
    assert config.retry.delay_sequence_seconds == (0.1, 0.5)
    assert config.retry.retryable_statuses == frozenset({429, 503})


def test_invalid_values_fall_back_per_field() -> None:
    config = parse_config(
        {
            "timeout_seconds": -1,
            "cache": {"max_size": "big", "ttl_seconds": 0},
            "retry": {"max_retries": -3, "delay_sequence_ms": [], "retryable_statuses": "all"},
        }
    )
    defaults = ClientConfig()

    assert config.timeout_seconds == defaults.timeout_seconds
    assert config.cache == defaults.cache
    assert config.retry == defaults.retry


def test_fractional_retryable_statuses_fall_back_to_defaults() -> None:
    config = parse_config({"retry": {"retryable_statuses": [429, 503.7]}})

    assert config.retry.retryable_statuses == RetryPolicy().retryable_statuses


def test_non_object_payload_gives_defaults() -> None:
    assert parse_config(["not", "a", "dict"]) == ClientConfig()


def test_broken_json_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "client_config.json"
    path.write_text("{broken", encoding="utf-8")

    assert load_config(path) == ClientConfig()


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEXPAPRIKA_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("DEXPAPRIKA_NO_CACHE", "1")

    config = load_config(tmp_path / "absent.json")

    assert config.base_url == "http://localhost:8080"
    assert config.cache.enabled is False
    assert config.cache.max_size == 1000


def test_config_path_prefers_explicit_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    explicit = tmp_path / "custom.json"
    monkeypatch.setenv("DEXPAPRIKA_CONFIG", str(explicit))

    assert config_path() == explicit


def test_config_path_uses_xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert config_path() == tmp_path / "dexpaprika" / "client_config.json"


def test_load_config_reads_default_location(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    target = tmp_path / "dexpaprika" / "client_config.json"
    target.parent.mkdir(parents=True)
    target.write_text(json.dumps({"user_agent": "custom/1.0"}), encoding="utf-8")

    assert load_config().user_agent == "custom/1.0"
