"""Tests for settings and hook configuration loading."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest
from pydantic import ValidationError

from sentiment_service.config import (
    ConfigError,
    HookConfig,
    ServiceConfig,
    Settings,
    load_service_config,
)

SAMPLE_CONFIG = {
    "port": 9000,
    "defaultHook": "comment",
    "hooks": {
        "comment": {"url": "https://cms.local/comments/%s"},
        "captions": {
            "url": "https://media.local/captions/%v",
            "headers": {"Authorization": "Bearer abc", "X-Trace": ["1", "2"]},
            "key": "series",
            "timed": True,
        },
    },
}


def _write(tmp_path: Path, data: object) -> str:
    path = tmp_path / "config.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return str(path)


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.config_path == "./config.json"
        assert s.hook_timeout_seconds == 30.0
        assert s.scoring_backend == "lexicon"
        assert s.api_port == 8080

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("HOOK_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("CONFIG_PATH", "/etc/sentiment/config.json")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.hook_timeout_seconds == 5.0
        assert s.config_path == "/etc/sentiment/config.json"


class TestHookConfig:
    def test_url_needs_exactly_one_slot(self) -> None:
        with pytest.raises(ValidationError):
            HookConfig(url="https://cms.local/comments")
        with pytest.raises(ValidationError):
            HookConfig(url="https://cms.local/%s/%s")

    def test_escaped_percent_is_not_a_slot(self) -> None:
        assert HookConfig(url="https://cms.local/%%s/%s").url == "https://cms.local/%%s/%s"
        with pytest.raises(ValidationError):
            HookConfig(url="https://cms.local/%%s")

    def test_single_header_value_becomes_list(self) -> None:
        hook = HookConfig(url="https://x.local/%s", headers={"Authorization": "Bearer abc"})
        assert hook.headers == {"Authorization": ["Bearer abc"]}

    def test_unknown_default_hook_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceConfig.model_validate(
                {"defaultHook": "missing", "hooks": {"a": {"url": "http://x.local/%s"}}}
            )


class TestLoadFromFile:
    def test_loads_valid_file(self, tmp_path) -> None:
        config = load_service_config(_write(tmp_path, SAMPLE_CONFIG))

        assert config.port == 9000
        assert config.default_hook == "comment"
        captions = config.hooks["captions"]
        assert captions.timed is True
        assert captions.key == "series"
        assert captions.headers == {"Authorization": ["Bearer abc"], "X-Trace": ["1", "2"]}

    def test_missing_file_gives_empty_config(self, tmp_path) -> None:
        config = load_service_config(str(tmp_path / "absent.json"))
        assert config.hooks == {}
        assert config.port is None

    def test_invalid_json_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_service_config(_write(tmp_path, "{hooks: "))

    def test_invalid_document_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="invalid"):
            load_service_config(_write(tmp_path, {"hooks": {"a": {"url": "no-slot"}}}))


class TestLoadFromUrl:
    @patch("sentiment_service.config.httpx.get")
    def test_fetches_url(self, mock_get) -> None:
        response = MagicMock()
        response.text = json.dumps(SAMPLE_CONFIG)
        mock_get.return_value = response

        config = load_service_config("https://config.local/sentiment.json", timeout=3.0)

        mock_get.assert_called_once_with("https://config.local/sentiment.json", timeout=3.0)
        response.raise_for_status.assert_called_once()
        assert sorted(config.hooks) == ["captions", "comment"]

    @patch("sentiment_service.config.httpx.get")
    def test_unreachable_url_raises(self, mock_get) -> None:
        mock_get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(ConfigError, match="Could not fetch"):
            load_service_config("http://config.local/sentiment.json")
